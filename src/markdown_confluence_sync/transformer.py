"""Transform Markdown into Confluence ADF with user plugins."""

from __future__ import annotations

import logging
from dataclasses import fields
from enum import Enum
from typing import Any, Mapping

from markdown_confluence_sync.backend import (
    MarkdownBackend,
    MarkdownItBackend,
    markdown_to_html_tree,
)
from markdown_confluence_sync.builtin import BUILTIN_HTML_PLUGINS, BUILTIN_MARKDOWN_PLUGINS
from markdown_confluence_sync.config import PLUGIN_FIELDS, TransformerOptions, load_config
from markdown_confluence_sync.errors import InvalidConfigError
from markdown_confluence_sync.pipeline import Processor
from markdown_confluence_sync.plugins import (
    PluginEntry,
    apply_plugins,
    merge_plugins,
    plugin_names,
)

logger = logging.getLogger(__name__)


class TransformerState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class ConfluencePageTransformer:
    """Converts Markdown to ADF through a configurable plugin pipeline.

    Plugins run in four groups around the built-ins::

        parse -> markdown before -> built-in -> markdown after
              -> element tree
              -> html before -> built-in (ADF compiler) -> html after
              -> compile

    Configuration is resolved once, on the first call to ``initialize`` or
    ``transform``; the instance can then be reused for any number of
    documents.
    """

    def __init__(
        self,
        options: TransformerOptions | Mapping[str, Any] | None = None,
        backend: MarkdownBackend | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        if isinstance(options, Mapping):
            options = _options_from_mapping(options)
        self.options = options or TransformerOptions()
        self.backend = backend or MarkdownItBackend()
        self.config = config
        self.state = TransformerState.UNINITIALIZED
        self.markdown_plugins: list[PluginEntry] = []
        self.html_plugins: list[PluginEntry] = []

    @property
    def initialized(self) -> bool:
        return self.state is TransformerState.READY

    def initialize(self) -> None:
        """Resolve configuration and merge plugin groups.

        Calls after the first successful one are no-ops.

        Raises:
            ConfigLoadError: If the configuration file cannot be loaded.
            InvalidConfigError: If the configuration is malformed.
        """
        if self.state is TransformerState.READY:
            return

        self.state = TransformerState.INITIALIZING
        try:
            if self.config is None:
                self.config = load_config(self.options.config_path)

            groups = {key: self._resolve_plugins(key) for key in PLUGIN_FIELDS}

            self.markdown_plugins = merge_plugins(
                groups["markdown_plugins_before"],
                BUILTIN_MARKDOWN_PLUGINS,
                groups["markdown_plugins_after"],
            )
            self.html_plugins = merge_plugins(
                groups["html_plugins_before"],
                BUILTIN_HTML_PLUGINS,
                groups["html_plugins_after"],
            )
        except Exception:
            self.state = TransformerState.UNINITIALIZED
            raise

        logger.debug(
            f"Initialized with {len(self.markdown_plugins)} markdown plugins "
            f"and {len(self.html_plugins)} html plugins"
        )
        self.state = TransformerState.READY

    def _resolve_plugins(self, key: str) -> list[PluginEntry]:
        """Options win over the config file per field; no field-level merge."""
        option = getattr(self.options, key)
        if option is not None:
            return list(option)
        return list((self.config or {}).get(key) or [])

    def build_processor(self) -> Processor:
        """Build the pipeline for the resolved plugin groups."""
        self.initialize()

        processor = Processor(parser=self.backend.parse)
        processor = apply_plugins(processor, self.markdown_plugins)
        processor = processor.use(markdown_to_html_tree(self.backend))
        return apply_plugins(processor, self.html_plugins)

    def transform(self, markdown: str) -> dict[str, Any]:
        """Transform Markdown into an ADF document.

        Args:
            markdown: Markdown source.

        Returns:
            ADF document dictionary.

        Raises:
            StepExecutionError: If a plugin step raises.
        """
        file = self.build_processor().process(markdown)
        return file.data.get("adf") or file.result

    def get_plugin_configuration(self) -> dict[str, list[str]]:
        """Names of the resolved plugins, in execution order."""
        if not self.initialized:
            return {"markdown": [], "html": []}

        return {
            "markdown": plugin_names(self.markdown_plugins),
            "html": plugin_names(self.html_plugins),
        }


def _options_from_mapping(options: Mapping[str, Any]) -> TransformerOptions:
    known = {field.name for field in fields(TransformerOptions)}
    unknown = sorted(set(options) - known)
    if unknown:
        raise InvalidConfigError(
            f"Unknown transformer option(s): {', '.join(unknown)} "
            f"(expected one of: {', '.join(sorted(known))})"
        )
    return TransformerOptions(**options)
