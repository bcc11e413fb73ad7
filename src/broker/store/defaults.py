"""Default-argument store: the `defaults.cfg` file.

One `bundle/action args...` entry per line. Only the first line for a given
pair counts, and the separating space after the key is mandatory.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from broker.store.files import read_lines


@dataclass(frozen=True, slots=True)
class DefaultsConfig:
    lines: tuple[str, ...] = ()

    def lookup(self, bundle: str, action: str) -> str:
        prefix = f"{bundle}/{action} "
        for line in self.lines:
            if line.startswith(prefix):
                return line[len(prefix):]
        return ""

    def args_for(self, bundle: str, action: str) -> list[str]:
        return self.lookup(bundle, action).split()


def parse_defaults_lines(lines: Iterable[str]) -> DefaultsConfig:
    return DefaultsConfig(tuple(lines))


def parse_defaults(path: Path) -> DefaultsConfig:
    return parse_defaults_lines(read_lines(path))


def get_defaults(path: Path, bundle: str, action: str) -> str:
    """Raw argument string configured for `bundle/action`, or ''."""
    return parse_defaults(path).lookup(bundle, action)
