"""Tests for configuration loading."""

import pytest

from airspace.core.config import DEFAULT_SOURCE, AirspaceSettings, ConfigError, ConfigLoader
from airspace.core.logging_system import LoggingError, get_logger, shutdown_logging


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings file overriding some values."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        "airspace:\n"
        "  source: data/airspace.yaml\n"
        "  timeout_s: 5\n"
        "logging:\n"
        "  config: config/logging.yaml\n",
        encoding="utf-8",
    )
    return path


class TestConfigLoader:
    """Test ConfigLoader class."""

    def test_load(self, settings_file):
        """Test loading a YAML file."""
        config = ConfigLoader.load(settings_file)

        assert config.get("airspace.source") == "data/airspace.yaml"
        assert config.get("airspace.timeout_s") == 5

    def test_get_default(self, settings_file):
        """Test missing keys return the default."""
        config = ConfigLoader.load(settings_file)

        assert config.get("airspace.missing", default=1.5) == 1.5
        assert config.get("airspace.source.deeper") is None

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            ConfigLoader.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test invalid YAML raises ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("a: b: c: {{{", encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to load"):
            ConfigLoader.load(path)

    def test_empty_file(self, tmp_path):
        """Test an empty file loads as an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert ConfigLoader.load(path).to_dict() == {}

    def test_non_mapping_root(self, tmp_path):
        """Test a list at the root is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="not a mapping"):
            ConfigLoader.load(path)

    def test_get_section(self):
        """Test fetching a whole section."""
        config = ConfigLoader({"airspace": {"timeout_s": 3}, "flag": True})

        assert config.get_section("airspace") == {"timeout_s": 3}

        with pytest.raises(ConfigError, match="not found"):
            config.get_section("missing")
        with pytest.raises(ConfigError, match="not a section"):
            config.get_section("flag")

    def test_merge(self):
        """Test merging overrides nested values and keeps the rest."""
        base = ConfigLoader({"airspace": {"source": "a", "timeout_s": 30}})
        base.merge(ConfigLoader({"airspace": {"source": "b"}, "extra": 1}))

        assert base.to_dict() == {"airspace": {"source": "b", "timeout_s": 30}, "extra": 1}


class TestAirspaceSettings:
    """Test AirspaceSettings class."""

    def test_defaults(self):
        """Test default settings."""
        settings = AirspaceSettings()

        assert settings.source == DEFAULT_SOURCE
        assert settings.timeout_s == 30.0
        assert settings.arc_step_deg == 10.0
        assert settings.logging_config is None

    def test_from_empty_config(self):
        """Test an empty configuration gives the defaults."""
        assert AirspaceSettings.from_config(ConfigLoader({})) == AirspaceSettings()

    def test_load(self, settings_file):
        """Test loading settings from a file fills gaps with defaults."""
        settings = AirspaceSettings.load(settings_file)

        assert settings.source == "data/airspace.yaml"
        assert settings.timeout_s == 5.0
        assert settings.arc_step_deg == 10.0
        assert settings.logging_config == "config/logging.yaml"

    def test_invalid_number(self):
        """Test a non-numeric timeout is rejected."""
        config = ConfigLoader({"airspace": {"timeout_s": "soon"}})

        with pytest.raises(ConfigError, match="Invalid airspace settings"):
            AirspaceSettings.from_config(config)

    def test_non_positive_step(self):
        """Test a zero arc step is rejected."""
        config = ConfigLoader({"airspace": {"arc_step_deg": 0}})

        with pytest.raises(ConfigError, match="must be positive"):
            AirspaceSettings.from_config(config)

    def test_configure_logging_uses_logging_config(self, tmp_path):
        """Test configure_logging applies the component settings of logging_config."""
        log_dir = tmp_path / "custom"
        config = tmp_path / "logging.yaml"
        config.write_text(
            f"log_dir: {log_dir.as_posix()}\n"
            "console: {enabled: false}\n"
            "components:\n"
            "  repository: {level: INFO, dedicated_file: true}\n",
            encoding="utf-8",
        )
        settings = AirspaceSettings(source="data/airspace.yaml", logging_config=str(config))

        settings.configure_logging(use_platform_dir=False)
        get_logger("repository").info("Reloaded")
        shutdown_logging()

        assert "Reloaded" in (log_dir / "repository.log").read_text(encoding="utf-8")

    def test_configure_logging_defaults(self, isolated_log_dir):
        """Test configure_logging without a logging config uses built-in defaults."""
        AirspaceSettings().configure_logging()
        get_logger("test").info("Default logging")
        shutdown_logging()

        log_file = isolated_log_dir / "airspace.log"
        assert "Default logging" in log_file.read_text(encoding="utf-8")

    def test_configure_logging_missing_file(self, tmp_path):
        """Test a missing logging config raises LoggingError."""
        settings = AirspaceSettings(logging_config=str(tmp_path / "missing.yaml"))

        with pytest.raises(LoggingError, match="not found"):
            settings.configure_logging()
