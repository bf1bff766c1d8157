"""Exceptions raised by the transformer."""

from __future__ import annotations


class ConfluenceSyncError(Exception):
    """Base class for all errors raised by this package."""


class ConfigLoadError(ConfluenceSyncError):
    """A configuration file exists but could not be loaded."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Failed to load config file {path}: {cause}")
        self.path = path


class InvalidConfigError(ConfluenceSyncError, ValueError):
    """A loaded configuration does not have the expected shape."""


class InvalidPluginEntryError(ConfluenceSyncError, TypeError):
    """A plugin entry is neither a plugin nor a [plugin, options] pair."""


class StepExecutionError(ConfluenceSyncError):
    """A processing step raised while the pipeline was running."""

    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"Step '{step}' failed: {cause}")
        self.step = step
