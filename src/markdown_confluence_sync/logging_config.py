"""Logging configuration for the transformer."""

import logging
import sys
from pathlib import Path

from markdown_confluence_sync.config import LoggingSettings

PACKAGE_LOGGER = "markdown_confluence_sync"


def resolve_level(settings: LoggingSettings, verbose: bool = False) -> int:
    """Numeric log level for ``settings``; unknown names fall back to INFO."""
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(settings.level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: LoggingSettings, verbose: bool = False) -> None:
    """Route the package logger to stderr and, optionally, a log file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        settings: Logging settings, usually read from the configuration file.
        verbose: If True, override level to DEBUG.
    """
    level = resolve_level(settings, verbose)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in package_logger.handlers:
        old.close()
    package_logger.handlers.clear()
    package_logger.setLevel(level)

    formatter = logging.Formatter(settings.format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger.

    Args:
        name: Logger suffix, e.g. a plugin name.

    Returns:
        Logger instance.
    """
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
