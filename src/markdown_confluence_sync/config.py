"""Configuration loading and validation.

Configuration is read from a Python module or a YAML file. Python modules
expose their settings as public module-level names; YAML files refer to
plugins as ``"package.module:attribute"`` strings.
"""

from __future__ import annotations

import importlib
import logging
import runpy
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

import yaml

from markdown_confluence_sync.errors import ConfigLoadError, InvalidConfigError
from markdown_confluence_sync.plugins import PluginEntry

logger = logging.getLogger(__name__)

# Looked up in the working directory in this order; the first match wins.
CONFIG_FILE_NAMES = [
    "markdown-confluence-sync.config.py",
    "markdown-confluence-sync.config.yaml",
    "markdown-confluence-sync.config.yml",
]

PLUGIN_FIELDS = (
    "markdown_plugins_before",
    "markdown_plugins_after",
    "html_plugins_before",
    "html_plugins_after",
)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "LoggingSettings":
        """Read the optional ``logging`` section of a configuration."""
        data = (config or {}).get("logging") or {}
        if not isinstance(data, Mapping):
            raise InvalidConfigError("Config option 'logging' must be a mapping")
        return cls(
            level=data.get("level", "INFO"),
            file=data.get("file"),
            format=data.get("format", DEFAULT_LOG_FORMAT),
        )


@dataclass
class TransformerOptions:
    """Options passed directly to a transformer.

    A plugin field left as ``None`` falls back to the configuration file;
    any other value, including an empty list, replaces it.
    """

    config_path: str | Path | None = None
    markdown_plugins_before: list[PluginEntry] | None = None
    markdown_plugins_after: list[PluginEntry] | None = None
    html_plugins_before: list[PluginEntry] | None = None
    html_plugins_after: list[PluginEntry] | None = None


def find_config_file(directory: str | Path | None = None) -> Path | None:
    """Return the first conventional config file in ``directory`` (default: cwd)."""
    base = Path(directory) if directory is not None else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any] | None:
    """Load and validate a configuration file.

    Args:
        config_path: Explicit configuration file. When omitted, the current
            working directory is searched for ``CONFIG_FILE_NAMES``.

    Returns:
        The validated configuration, or None if there is no config file.

    Raises:
        ConfigLoadError: If the file exists but cannot be loaded.
        InvalidConfigError: If the loaded configuration has the wrong shape.
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.exists():
        logger.debug(f"No configuration file found (explicit path: {config_path})")
        return None

    try:
        if path.suffix in (".yaml", ".yml"):
            config = _load_yaml(path)
        else:
            config = _load_python(path)
    except Exception as e:
        raise ConfigLoadError(str(path), e) from e

    validate_config(config)
    logger.info(f"Loaded configuration from {path}")
    return dict(config)


def _load_python(path: Path) -> dict[str, Any]:
    # Sibling modules of the config file are importable while it runs.
    directory = str(path.resolve().parent)
    sys.path.insert(0, directory)
    try:
        namespace = runpy.run_path(str(path))
    finally:
        sys.path.remove(directory)

    return {
        key: value
        for key, value in namespace.items()
        if not key.startswith("_") and not isinstance(value, ModuleType)
    }


def _load_yaml(path: Path) -> Any:
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if isinstance(data, Mapping):
        for key in PLUGIN_FIELDS:
            entries = data.get(key)
            if isinstance(entries, list):
                data[key] = [_resolve_entry(entry) for entry in entries]
    return data


def _resolve_entry(entry: Any) -> Any:
    if isinstance(entry, str):
        return resolve_plugin(entry)
    if isinstance(entry, list) and entry and isinstance(entry[0], str):
        return [resolve_plugin(entry[0]), *entry[1:]]
    return entry


def resolve_plugin(reference: str) -> Any:
    """Import a plugin from a ``"package.module:attribute"`` reference."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Plugin reference must look like 'module:attribute', got {reference!r}")

    target: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        target = getattr(target, part)
    return target


def validate_config(config: Any) -> None:
    """Validate the structure of a configuration mapping.

    Raises:
        InvalidConfigError: If the configuration or one of its plugin
            entries is malformed.
    """
    if not isinstance(config, Mapping):
        raise InvalidConfigError("Config must be a mapping")

    for key in PLUGIN_FIELDS:
        if config.get(key) is None:
            continue

        entries = config[key]
        if not isinstance(entries, (list, tuple)):
            raise InvalidConfigError(f"Config option '{key}' must be a list")

        for index, entry in enumerate(entries):
            validate_plugin_entry(entry, f"{key}[{index}]")


def validate_plugin_entry(entry: Any, where: str) -> None:
    """Validate a single ``[plugin, options?]`` entry.

    Args:
        entry: The entry to validate.
        where: Location used in error messages, e.g. ``html_plugins_after[2]``.
    """
    if not isinstance(entry, (list, tuple)):
        raise InvalidConfigError(f"Plugin entry at {where} must be a list [plugin, options?]")

    if len(entry) == 0 or len(entry) > 2:
        raise InvalidConfigError(
            f"Plugin entry at {where} must have 1 or 2 elements [plugin, options?]"
        )

    plugin = entry[0]
    if not callable(plugin):
        raise InvalidConfigError(
            f"Plugin at {where}[0] must be callable, got {type(plugin).__name__}"
        )

    if len(entry) == 2 and not isinstance(entry[1], Mapping):
        raise InvalidConfigError(f"Plugin options at {where}[1] must be a mapping if provided")
