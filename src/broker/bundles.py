"""Bundle and action script resolution.

Virtual bundles are plain symlinks inside the bundles root; the OS follows
them when the script path is opened, so nothing here walks links itself.
"""

import errno
import os
import stat
from pathlib import Path

from broker.errors import ScriptUnavailable


def resolve(bundles_root: Path, bundle: str) -> Path:
    return bundles_root / bundle


def script_path(bundle_dir: Path, action: str, ext: str = ".sh") -> Path:
    return bundle_dir / f"{action}{ext}"


def require_executable(script: Path) -> Path:
    """Return `script` if it is an executable regular file, else raise."""
    try:
        mode = script.stat().st_mode
    except OSError as exc:
        if exc.errno == errno.ELOOP:
            raise ScriptUnavailable(str(script), "cannot be resolved (symlink loop)") from exc
        raise ScriptUnavailable(str(script)) from exc
    if not stat.S_ISREG(mode) or not os.access(script, os.X_OK):
        raise ScriptUnavailable(str(script))
    return script
