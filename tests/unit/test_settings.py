"""Unit tests for configuration dataclasses and pydantic settings."""

from pathlib import Path

import pytest

from vpaid_unit.config import AdUnitConfig, HeadlessSurfaceConfig, TimeMode
from vpaid_unit.exceptions import VpaidConfigError
from vpaid_unit.settings import Settings


class TestAdUnitConfig:
    """Test AdUnitConfig dataclass."""

    def test_default_config(self):
        config = AdUnitConfig()

        assert config.vpaid_version == "2.0"
        assert config.click_id == "creative_click"
        assert config.interaction_id == "creative_mouseover"
        assert config.player_handles_click is True
        assert config.start_muted is True
        assert config.inline is True
        assert isinstance(config.surface, HeadlessSurfaceConfig)

    def test_surface_defaults(self):
        config = HeadlessSurfaceConfig()

        assert config.duration_sec == 30.0
        assert config.time_mode == TimeMode.SIMULATED
        assert config.fail_on_play is False


class TestSettings:
    """Test Settings loading."""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load_from_yaml(tmp_path / "absent.yaml")

        assert settings.unit.vpaid_version == "2.0"
        assert settings.metrics_backend == "noop"

    def test_load_from_yaml(self, tmp_path):
        """Test values are read from YAML."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "log_level: DEBUG\n"
            "unit:\n"
            "  click_id: banner_click\n"
            "surface:\n"
            "  duration_sec: 15\n"
            "  time_mode: real\n"
        )

        settings = Settings.load_from_yaml(config_path)

        assert settings.log_level == "DEBUG"
        assert settings.unit.click_id == "banner_click"
        assert settings.surface.duration_sec == 15.0
        assert settings.surface.time_mode == TimeMode.REAL

    def test_environment_file_override(self, tmp_path, monkeypatch):
        """Test config.{environment}.yaml is merged over the base file."""
        monkeypatch.delenv("VPAID_ENVIRONMENT", raising=False)
        (tmp_path / "config.yaml").write_text(
            "environment: staging\nsurface:\n  duration_sec: 15\n  speed: 2\n"
        )
        (tmp_path / "config.staging.yaml").write_text("surface:\n  duration_sec: 20\n")

        settings = Settings.load_from_yaml(tmp_path / "config.yaml")

        assert settings.surface.duration_sec == 20.0
        assert settings.surface.speed == 2.0

    def test_env_var_override(self, tmp_path, monkeypatch):
        """Test VPAID_* variables win over YAML."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("surface:\n  duration_sec: 15\n")
        monkeypatch.setenv("VPAID_SURFACE__DURATION_SEC", "12")

        settings = Settings.load_from_yaml(config_path)

        assert settings.surface.duration_sec == 12.0

    def test_malformed_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("unit: [unclosed\n")

        with pytest.raises(VpaidConfigError) as exc_info:
            Settings.load_from_yaml(config_path)

        assert exc_info.value.config_path == str(config_path)

    def test_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(VpaidConfigError, match="mapping"):
            Settings.load_from_yaml(config_path)

    def test_invalid_values(self, tmp_path):
        """Test validation failures become VpaidConfigError."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("surface:\n  duration_sec: -5\n")

        with pytest.raises(VpaidConfigError, match="Invalid ad unit configuration"):
            Settings.load_from_yaml(config_path)

    def test_to_unit_config(self):
        """Test conversion into the dataclass consumed by the unit."""
        settings = Settings(
            unit={"start_muted": False, "player_handles_click": False},
            surface={"duration_sec": 8, "fail_on_play": True},
        )

        config = settings.to_unit_config()

        assert isinstance(config, AdUnitConfig)
        assert config.start_muted is False
        assert config.player_handles_click is False
        assert config.surface.duration_sec == 8.0
        assert config.surface.fail_on_play is True

    def test_deep_merge(self):
        merged = Settings._deep_merge({"a": {"b": 1, "c": 2}, "d": 1}, {"a": {"b": 3}})

        assert merged == {"a": {"b": 3, "c": 2}, "d": 1}

    def test_default_path_is_relative_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings_dir = Path(tmp_path) / "settings"
        settings_dir.mkdir()
        (settings_dir / "config.yaml").write_text("metrics_backend: prometheus\n")

        assert Settings.load_from_yaml().metrics_backend == "prometheus"
