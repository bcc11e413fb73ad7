import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from broker.config import Settings, get_settings
from broker.logging import clear_context

_BROKER_ENV = (
    "BROKER_DIR",
    "BROKER_BUNDLES_DIR",
    "BROKER_ACCESS_CFG",
    "BROKER_DEFAULTS_CFG",
    "BROKER_SCRIPT_EXT",
    "SSH_ORIGINAL_COMMAND",
    "APP_ENV",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for key in _BROKER_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BROKER_DIR", str(tmp_path / "broker"))
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def write_access(settings: Settings) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        path = settings.access_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def write_defaults(settings: Settings) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        path = settings.defaults_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def write_script(settings: Settings) -> Callable[..., Path]:
    def _write(bundle: str, action: str, body: str, mode: int = 0o755) -> Path:
        path = settings.bundles_path / bundle / f"{action}.sh"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}\n")
        os.chmod(path, mode)
        return path

    return _write
