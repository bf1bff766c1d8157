"""Markdown to Confluence ADF transformer.

A Python library and CLI tool for converting Markdown documents to the
Atlassian Document Format with user-supplied plugins run before and after
the built-in processing steps.
"""

from markdown_confluence_sync.adf import compile_adf, extract_text
from markdown_confluence_sync.backend import MarkdownBackend, MarkdownItBackend
from markdown_confluence_sync.builtin import BUILTIN_HTML_PLUGINS, BUILTIN_MARKDOWN_PLUGINS
from markdown_confluence_sync.config import (
    TransformerOptions,
    load_config,
    validate_config,
    validate_plugin_entry,
)
from markdown_confluence_sync.errors import (
    ConfigLoadError,
    ConfluenceSyncError,
    InvalidConfigError,
    InvalidPluginEntryError,
    StepExecutionError,
)
from markdown_confluence_sync.nodes import Node
from markdown_confluence_sync.pipeline import Compiler, ProcessingFile, Processor
from markdown_confluence_sync.plugins import apply_plugins, merge_plugins, normalize_plugin_entry
from markdown_confluence_sync.transformer import ConfluencePageTransformer

__version__ = "0.1.0"

__all__ = [
    "ConfluencePageTransformer",
    "TransformerOptions",
    "BUILTIN_MARKDOWN_PLUGINS",
    "BUILTIN_HTML_PLUGINS",
    "MarkdownBackend",
    "MarkdownItBackend",
    "Node",
    "Processor",
    "ProcessingFile",
    "Compiler",
    "compile_adf",
    "extract_text",
    "load_config",
    "validate_config",
    "validate_plugin_entry",
    "merge_plugins",
    "normalize_plugin_entry",
    "apply_plugins",
    "ConfluenceSyncError",
    "ConfigLoadError",
    "InvalidConfigError",
    "InvalidPluginEntryError",
    "StepExecutionError",
]
