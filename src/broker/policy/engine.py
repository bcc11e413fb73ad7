"""Allow-list access evaluation.

There are no deny rules and no wildcards: a request is allowed only when the
user's section holds an entry for the exact bundle name that lists the exact
action. Unknown user, unknown bundle and unknown action are all just "denied".
"""

from broker.errors import PermissionDenied
from broker.store.access import AccessConfig


def is_allowed(config: AccessConfig, user: str, bundle: str, action: str) -> bool:
    wanted = action.strip()
    return any(
        rule.bundle == bundle and rule.allows(wanted) for rule in config.entries_for(user)
    )


def require_allowed(config: AccessConfig, user: str, bundle: str, action: str) -> None:
    if not is_allowed(config, user, bundle, action):
        raise PermissionDenied(user, bundle, action)
