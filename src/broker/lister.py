"""Report of the bundles and actions a user may run."""

from broker.errors import NoAccessError
from broker.store.access import AccessConfig

BUNDLE_COLUMN_WIDTH = 20
NO_ACCESS_MESSAGE = "There are no accessible stacks/actions. At least for this user."


def headline(user: str) -> str:
    return f"Stacks and actions available for {user}:"


def list_actions(config: AccessConfig, user: str) -> list[str]:
    """One aligned `bundle : actions` line per entry, in declaration order.

    Raises NoAccessError when the user has no entries at all.
    """
    entries = config.entries_for(user)
    if not entries:
        raise NoAccessError(NO_ACCESS_MESSAGE)
    return [
        f"{rule.bundle:<{BUNDLE_COLUMN_WIDTH}} : {','.join(rule.actions)}" for rule in entries
    ]
