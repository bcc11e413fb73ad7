"""Character-class gate applied to every caller-supplied token."""

import re
from collections.abc import Iterable

from broker.errors import UsageError

SAFE_TOKEN = re.compile(r"[a-zA-Z0-9_=-]+")


def validate(token: str) -> bool:
    return SAFE_TOKEN.fullmatch(token) is not None


def validate_invocation(user: str, bundle: str, action: str, args: Iterable[str]) -> None:
    """Raise UsageError on the first token outside the safe character set."""
    for name, value in (("user", user), ("bundle", bundle), ("action", action)):
        if not validate(value):
            raise UsageError(f"Invalid {name} detected: {value!r}.")
    for arg in args:
        if not validate(arg):
            raise UsageError(f"Invalid additional argument detected: {arg!r}. Exiting.")
