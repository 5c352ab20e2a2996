from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from nw_tracker.errors import ConfigDirError

APP_DIR_NAME = "nw-tracker"
PORTFOLIO_FILE_NAME = "portfolio.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    XDG_CONFIG_HOME: str | None = None
    HOME: str | None = None
    # Explicit portfolio file; bypasses the config-dir lookup entirely.
    NW_TRACKER_PORTFOLIO: str | None = None
    NW_TRACKER_LOG_LEVEL: str = "WARNING"

    @property
    def portfolio_override(self) -> str | None:
        return (self.NW_TRACKER_PORTFOLIO or "").strip() or None

    @property
    def log_level(self) -> str:
        return (self.NW_TRACKER_LOG_LEVEL or "WARNING").strip().upper()

    def config_dir(self) -> Path | None:
        xdg = (self.XDG_CONFIG_HOME or "").strip()
        if xdg:
            return Path(xdg)
        home = (self.HOME or "").strip()
        if home:
            return Path(home) / ".config"
        return None


def load_settings() -> Settings:
    return Settings()


def portfolio_path(settings: Settings | None = None) -> Path:
    """Resolve <config-dir>/nw-tracker/portfolio.json, honouring NW_TRACKER_PORTFOLIO."""
    settings = settings or load_settings()
    if settings.portfolio_override:
        return Path(settings.portfolio_override).expanduser()
    config_dir = settings.config_dir()
    if config_dir is None:
        raise ConfigDirError()
    return config_dir / APP_DIR_NAME / PORTFOLIO_FILE_NAME
