"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access
and defaults, plus the typed settings used to load airspace data.

Typical usage example:
    from airspace.core.config import AirspaceSettings, ConfigLoader

    config = ConfigLoader.load("config/settings.yaml")
    settings = AirspaceSettings.from_config(config)
    settings.configure_logging()
    timeout = config.get("airspace.timeout_s", default=30.0)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from airspace.core.logging_system import initialize_logging

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "https://gitlab.com/ahsparrow/airspace/-/raw/master/airspace.yaml"


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Provides loading, nested access, and default values for configuration.

    Examples:
        >>> config = ConfigLoader.load("config/settings.yaml")
        >>> source = config.get("airspace.source")
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If file cannot be loaded.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root is not a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Supports nested access like "airspace.timeout_s".

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            key: Section key (supports dot notation).

        Returns:
            Configuration section as dictionary.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Args:
            other: ConfigLoader to merge from.

        Note:
            Other config values override existing ones.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary.

        Returns:
            Configuration dictionary.
        """
        return self._data.copy()


@dataclass(frozen=True)
class AirspaceSettings:
    """Settings for obtaining and decoding airspace data.

    Attributes:
        source: URL or file path of the airspace YAML document
        timeout_s: Network timeout in seconds
        arc_step_deg: Angular step used when rasterising arcs
        logging_config: Optional path to a logging YAML file, applied by
            configure_logging()
    """

    source: str = DEFAULT_SOURCE
    timeout_s: float = 30.0
    arc_step_deg: float = 10.0
    logging_config: str | None = None

    @classmethod
    def defaults(cls) -> ConfigLoader:
        """Return the default configuration as a loader."""
        return ConfigLoader(
            {
                "airspace": {
                    "source": DEFAULT_SOURCE,
                    "timeout_s": 30.0,
                    "arc_step_deg": 10.0,
                },
                "logging": {"config": None},
            }
        )

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "AirspaceSettings":
        """Build settings from a configuration, filling gaps with defaults.

        Args:
            config: Loaded configuration.

        Returns:
            AirspaceSettings instance.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        merged = cls.defaults()
        merged.merge(config)
        section = merged.get_section("airspace")

        try:
            settings = cls(
                source=str(section["source"]),
                timeout_s=float(section["timeout_s"]),
                arc_step_deg=float(section["arc_step_deg"]),
                logging_config=merged.get("logging.config"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid airspace settings: {e}") from e

        if settings.timeout_s <= 0 or settings.arc_step_deg <= 0:
            raise ConfigError(
                "timeout_s and arc_step_deg must be positive: "
                f"{settings.timeout_s}, {settings.arc_step_deg}"
            )
        return settings

    @classmethod
    def load(cls, path: str | Path) -> "AirspaceSettings":
        """Load settings from a YAML file."""
        return cls.from_config(ConfigLoader.load(path))

    def configure_logging(self, use_platform_dir: bool = True) -> None:
        """Initialize the logging system from logging_config.

        Built-in defaults are used when no logging config is set. A relative
        path is resolved against the working directory.

        Args:
            use_platform_dir: If True, write logs to the platform log directory
                instead of the config's log_dir.

        Raises:
            LoggingError: If the logging config cannot be loaded.
        """
        initialize_logging(self.logging_config, use_platform_dir=use_platform_dir)
