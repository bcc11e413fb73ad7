"""Broker configuration contract."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from broker.errors import ConfigError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="WARNING")
    broker_dir: str = Field(alias="BROKER_DIR", default="~/.config/broker")
    bundles_dir: str = Field(alias="BROKER_BUNDLES_DIR", default="")
    access_cfg: str = Field(alias="BROKER_ACCESS_CFG", default="")
    defaults_cfg: str = Field(alias="BROKER_DEFAULTS_CFG", default="")
    script_ext: str = Field(alias="BROKER_SCRIPT_EXT", default=".sh")

    @property
    def base_path(self) -> Path:
        return Path(self.broker_dir).expanduser()

    @property
    def bundles_path(self) -> Path:
        if self.bundles_dir.strip():
            return Path(self.bundles_dir).expanduser()
        return self.base_path / "bundles"

    @property
    def access_path(self) -> Path:
        if self.access_cfg.strip():
            return Path(self.access_cfg).expanduser()
        return self.base_path / "access.cfg"

    @property
    def defaults_path(self) -> Path:
        if self.defaults_cfg.strip():
            return Path(self.defaults_cfg).expanduser()
        return self.base_path / "defaults.cfg"

    def child_env(self) -> dict[str, str]:
        """Locations exported to every task script."""
        return {
            "BROKER_DIR": str(self.base_path),
            "BROKER_STACKS_DIR": str(self.bundles_path),
            "BROKER_ACCESS_CFG": str(self.access_path),
            "BROKER_DEFAULTS_CFG": str(self.defaults_path),
        }


def validate_settings(settings: Settings) -> None:
    ext = settings.script_ext
    if not ext or not ext.startswith(".") or ext == ".":
        raise ConfigError(f"invalid configuration: BROKER_SCRIPT_EXT={ext!r} (needs '.<suffix>')")
    if "/" in ext:
        raise ConfigError(f"invalid configuration: BROKER_SCRIPT_EXT={ext!r} contains '/'")


def ensure_layout(settings: Settings) -> None:
    """Create the bundles directory and empty config files on first run.

    Failures are logged and swallowed: a missing config file reads as empty.
    """
    try:
        settings.bundles_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Could not create bundles directory %s: %s", settings.bundles_path, exc)
    for path in (settings.access_path, settings.defaults_path):
        if path.exists():
            continue
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            logger.warning("Could not create config file %s: %s", path, exc)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
