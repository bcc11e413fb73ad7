"""Argument merging.

Defaults are appended after the caller's arguments. Task scripts parse flags
last-occurrence-wins, so an administrator default always beats a caller flag
of the same name; this is how defaults pin arguments like `--env=production`.
"""

from collections.abc import Sequence


def merge(user_args: Sequence[str], default_args: Sequence[str]) -> list[str]:
    return [*user_args, *default_args]
