"""Lenient line reader shared by the access and defaults stores."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_lines(path: Path) -> list[str]:
    """Return the file's lines without line terminators.

    A missing or unreadable file reads as empty.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Config file %s unreadable, treating as empty: %s", path, exc)
        return []
    return text.splitlines()
