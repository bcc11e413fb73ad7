"""Access rules store: the INI-like `access.cfg` file.

    [alice]
    website=deploy,restart
    production=deploy

Each `[user]` header opens a section; every `bundle=actions` line below it
grants the comma-separated actions on that bundle. Lines outside a section,
blank lines, comments (`#`, `;`) and lines without `=` are ignored.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from broker.store.files import read_lines

COMMENT_PREFIXES = ("#", ";")


@dataclass(frozen=True, slots=True)
class AccessRule:
    bundle: str
    actions: tuple[str, ...]

    def allows(self, action: str) -> bool:
        return action.strip() in self.actions


@dataclass(frozen=True, slots=True)
class AccessConfig:
    """Rules keyed by user, in declaration order."""

    rules: dict[str, tuple[AccessRule, ...]] = field(default_factory=dict)

    def entries_for(self, user: str) -> tuple[AccessRule, ...]:
        return self.rules.get(user, ())


def _section_name(line: str) -> str | None:
    if line.startswith("[") and line.endswith("]"):
        return line[1:-1].strip()
    return None


def _split_actions(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_access_lines(lines: Iterable[str]) -> AccessConfig:
    rules: dict[str, list[AccessRule]] = {}
    current_user: str | None = None
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        section = _section_name(line)
        if section is not None:
            current_user = section
            continue
        if current_user is None or "=" not in line:
            continue
        key, _, value = line.partition("=")
        bundle = key.strip()
        if not bundle:
            continue
        rules.setdefault(current_user, []).append(AccessRule(bundle, _split_actions(value)))
    return AccessConfig({user: tuple(entries) for user, entries in rules.items()})


def parse_access(path: Path) -> AccessConfig:
    return parse_access_lines(read_lines(path))
