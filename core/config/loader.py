"""
Settings loader

Loads settings.yaml into an immutable Settings value.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths


@dataclass(frozen=True)
class BackendConfig:
    """Billing backend connection

    base_url empty means no backend is configured.
    """

    base_url: str
    api_token: str
    timeout: float


@dataclass(frozen=True)
class Settings:
    """Application settings (loaded from settings.yaml)"""

    backend: BackendConfig
    gst_home_state: str
    web_host: str
    web_port: int
    log_level: str


class SettingsLoadError(Exception):
    """settings.yaml could not be loaded"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml '{name}' must be a mapping")
    return section


def _positive_number(value: Any, field: str, cast: type) -> Any:
    try:
        number = cast(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid {field}: '{value}'") from e
    if number <= 0:
        raise ValueError(f"Invalid {field}: '{value}' (must be > 0)")
    return number


def load_settings(path: Path | None = None) -> Settings:
    """Load settings.yaml

    Args:
        path: settings.yaml path (default location when None)

    Returns:
        Settings

    Raises:
        SettingsLoadError: file missing, empty or malformed
        ValueError: invalid values (timeout, port, log level)
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"Failed to parse settings.yaml: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml is empty")
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml must be a mapping")

    backend = _section(data, "backend")
    gst = _section(data, "gst")
    web = _section(data, "web")
    logging_section = _section(data, "logging")

    base_url = str(backend.get("base_url") or "").rstrip("/")
    timeout = _positive_number(
        backend.get("timeout", Defaults.BACKEND_TIMEOUT_SEC), "backend.timeout", float
    )
    port = _positive_number(web.get("port", Defaults.WEB_PORT), "web.port", int)

    log_level = str(logging_section.get("level", Defaults.LOG_LEVEL)).upper()
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if log_level not in valid_levels:
        raise ValueError(
            f"Invalid logging.level: '{log_level}'. Valid values: {valid_levels}"
        )

    return Settings(
        backend=BackendConfig(
            base_url=base_url,
            api_token=str(backend.get("api_token") or ""),
            timeout=timeout,
        ),
        gst_home_state=str(gst.get("home_state") or Defaults.GST_HOME_STATE),
        web_host=str(web.get("host") or Defaults.WEB_HOST),
        web_port=port,
        log_level=log_level,
    )


def default_settings() -> Settings:
    """Settings used when no settings.yaml exists"""
    return Settings(
        backend=BackendConfig(
            base_url="",
            api_token="",
            timeout=Defaults.BACKEND_TIMEOUT_SEC,
        ),
        gst_home_state=Defaults.GST_HOME_STATE,
        web_host=Defaults.WEB_HOST,
        web_port=Defaults.WEB_PORT,
        log_level=Defaults.LOG_LEVEL,
    )


class AppSettings:
    """Application settings (singleton)

    Loads settings.yaml once per process.
    """

    _instance: "AppSettings | None" = None
    _settings: Settings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "AppSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def settings(self) -> Settings:
        assert self._settings is not None
        return self._settings

    @property
    def backend(self) -> BackendConfig:
        """Billing backend connection"""
        return self.settings.backend

    @property
    def gst_home_state(self) -> str:
        """Seller's state for GST"""
        return self.settings.gst_home_state

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> AppSettings:
    """AppSettings singleton

    Args:
        settings_path: settings.yaml path (default location when None)
    """
    return AppSettings(settings_path)
