"""Logging system for the airspace service and its components.

This module provides YAML-configured logging with per-component loggers,
platform-aware log locations and startup-based rotation.

Platform-specific log locations:
    - macOS: ~/Library/Logs/Airspace/airspace.log
    - Linux: ~/.airspace/logs/airspace.log
    - Windows: %AppData%/Airspace/Logs/airspace.log

Each start rotates logs, keeping the last 5 runs.

Typical usage example:
    from airspace.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    log = get_logger("repository")
    log.info("Loaded %d features", count)
"""

import logging
import logging.handlers
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

LOG_FILENAME = "airspace.log"

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_installed_handlers: list[tuple[logging.Logger, logging.Handler]] = []
_configured_loggers: list[logging.Logger] = []
_host_root_level: int | None = None
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory.
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "Airspace"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "Airspace" / "Logs"
    else:
        return Path.home() / ".airspace" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = LOG_FILENAME, keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames the current log to <name>.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename
    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(
    config_path: str | Path | None = None, use_platform_dir: bool = True
) -> None:
    """Initialize the logging system from YAML configuration.

    Nothing in the package calls this; the hosting application calls it
    once at startup. Until then, component loggers propagate to whatever
    handlers the host has installed. Components created before this call
    are reconfigured by it.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, use platform-specific log directory.
            If False, use directory from config.

    Raises:
        LoggingError: If the configuration cannot be loaded.
    """
    global _logging_config, _initialized

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                _logging_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    _release_handlers()
    log_dir = Path(_logging_config.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    file_config = _logging_config.get("file_log", {})
    rotate_logs(
        log_dir,
        file_config.get("filename", LOG_FILENAME),
        file_config.get("backup_count", 5),
    )

    _configure_root_logger()
    _initialized = True

    for name in _logging_config.get("components") or {}:
        get_logger(name)


def _get_default_config() -> dict[str, Any]:
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "file_log": {
            "enabled": True,
            "filename": LOG_FILENAME,
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "INFO",
        },
        "components": {},
    }


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(_get_formatter())
    logger.addHandler(handler)
    _installed_handlers.append((logger, handler))


def _release_handlers() -> None:
    """Detach and close the handlers this module installed, and forget loggers."""
    while _installed_handlers:
        logger, handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()

    for logger in _configured_loggers:
        logger.setLevel(logging.NOTSET)
        logger.disabled = False
    _configured_loggers.clear()
    _loggers_cache.clear()


def _configure_root_logger() -> None:
    global _host_root_level

    root_logger = logging.getLogger()
    if _host_root_level is None:
        _host_root_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)  # Filtering happens in handlers

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_config.get("level", "INFO")))
        _install(root_logger, console_handler)

    file_config = _logging_config.get("file_log", {})
    if file_config.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        file_handler = logging.FileHandler(
            log_dir / file_config.get("filename", LOG_FILENAME),
            mode="w",  # Old log was rotated on startup
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        _install(root_logger, file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that shows milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Loggers are cached. Once initialize_logging() has run, each one can be
    configured in the logging YAML under the 'components' section (level,
    enabled, dedicated_file). Before that, the plain logger is returned and
    no logging configuration is touched.

    Args:
        name: Logger name (typically the component name).

    Returns:
        Configured logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _loggers_cache[name] = logger
    if not _initialized:
        return logger

    component_config = (_logging_config.get("components") or {}).get(name)
    if not component_config:
        return logger

    _configured_loggers.append(logger)
    if component_config.get("enabled", True):
        if "level" in component_config:
            logger.setLevel(getattr(logging, component_config["level"]))

        if component_config.get("dedicated_file", False):
            log_dir = Path(_logging_config.get("log_dir", "logs"))
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / f"{name}.log",
                maxBytes=component_config.get("max_bytes", 10485760),
                backupCount=component_config.get("backup_count", 5),
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            _install(logger, file_handler)
    else:
        logger.disabled = True

    return logger


def shutdown_logging() -> None:
    """Flush and close the handlers installed by initialize_logging().

    Handlers added by the host application are left in place, and the root
    level is restored to what it was before initialization.
    """
    global _initialized, _host_root_level

    _release_handlers()
    if _host_root_level is not None:
        logging.getLogger().setLevel(_host_root_level)
        _host_root_level = None
    _initialized = False


class LoggerMixin:
    """Mixin that gives a class a component logger as self._log.

    Examples:
        >>> class Repository(LoggerMixin):
        ...     def __init__(self):
        ...         self.attach_logger("repository")
    """

    def attach_logger(self, name: str) -> None:
        """Attach a logger to this instance.

        Args:
            name: Logger name to use.
        """
        self._log = get_logger(name)
