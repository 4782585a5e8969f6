"""
Settings Management Module

Provides pydantic-based configuration management with:
- YAML configuration file loading
- Environment-specific override files (config.{environment}.yaml)
- Environment variable overrides (VPAID_*)
- Conversion into the AdUnitConfig dataclass used by the ad unit
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import AdUnitConfig, HeadlessSurfaceConfig, TimeMode
from .exceptions import VpaidConfigError


class SurfaceSettings(BaseModel):
    """Headless surface settings."""

    duration_sec: float = Field(default=30.0, gt=0)
    tick_interval_sec: float = Field(default=0.25, gt=0)
    time_mode: TimeMode = TimeMode.SIMULATED
    speed: float = Field(default=1.0, gt=0)
    fail_on_play: bool = False
    initial_volume: float = Field(default=1.0, ge=0, le=1)


class UnitSettings(BaseModel):
    """Ad unit protocol settings."""

    vpaid_version: str = "2.0"
    click_id: str = "creative_click"
    interaction_id: str = "creative_mouseover"
    player_handles_click: bool = True
    start_muted: bool = True
    inline: bool = True
    emit_progress_logs: bool = False


class Settings(BaseSettings):
    """
    Main settings with multi-environment support.

    Configuration hierarchy (lowest to highest precedence):
    1. settings/config.yaml (base)
    2. settings/config.{environment}.yaml (environment-specific)
    3. Environment variables (VPAID_*, nested with "__")

    Examples:
        >>> settings = Settings.load_from_yaml(Path("settings/config.yaml"))
        >>> settings.unit.vpaid_version
        '2.0'

        Override from the environment:
        >>> # VPAID_SURFACE__DURATION_SEC=15
        >>> Settings().surface.duration_sec
        15.0
    """

    model_config = SettingsConfigDict(
        env_prefix="VPAID_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    metrics_backend: str = "noop"

    unit: UnitSettings = Field(default_factory=UnitSettings)
    surface: SurfaceSettings = Field(default_factory=SurfaceSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables win over values read from YAML
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config file (default: settings/config.yaml
                relative to the working directory)

        Returns:
            Settings instance; defaults when the file does not exist

        Raises:
            VpaidConfigError: If the file is not valid YAML or fails validation
        """
        if config_path is None:
            config_path = Path.cwd() / "settings" / "config.yaml"

        if not config_path.exists():
            return cls()

        config_data = cls._read_yaml(config_path)

        env = os.getenv("VPAID_ENVIRONMENT", config_data.get("environment", "development"))
        env_config_path = config_path.parent / f"config.{env}.yaml"
        if env_config_path.exists():
            config_data = cls._deep_merge(config_data, cls._read_yaml(env_config_path))

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise VpaidConfigError(
                f"Invalid ad unit configuration: {e.error_count()} error(s)",
                config_path=str(config_path),
            ) from e

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise VpaidConfigError("Malformed YAML configuration", config_path=str(path)) from e
        if not isinstance(data, dict):
            raise VpaidConfigError(
                "Configuration root must be a mapping", config_path=str(path)
            )
        return data

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Settings._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def to_unit_config(self) -> AdUnitConfig:
        """Build the AdUnitConfig dataclass consumed by the ad unit."""
        return AdUnitConfig(
            **self.unit.model_dump(),
            surface=HeadlessSurfaceConfig(**self.surface.model_dump()),
        )


@lru_cache
def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Settings instance
    """
    return Settings.load_from_yaml(config_path)


def reload_settings() -> Settings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "Settings",
    "UnitSettings",
    "SurfaceSettings",
    "get_settings",
    "reload_settings",
]
