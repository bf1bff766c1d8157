"""Built-in plugins run between the user's before and after plugins."""

from __future__ import annotations

from typing import Any, Mapping

from markdown_confluence_sync.adf import AdfCompiler
from markdown_confluence_sync.pipeline import ProcessingFile


def confluence_macros(options: Mapping[str, Any]):
    """Markdown tree hook reserved for Confluence macro rewriting.

    Currently returns the tree unchanged.
    """

    def transformer(tree: Any, file: ProcessingFile) -> Any:
        return tree

    return transformer


def confluence_adf(options: Mapping[str, Any]) -> AdfCompiler:
    """Compile the final element tree to ADF."""
    return AdfCompiler()


BUILTIN_MARKDOWN_PLUGINS = [(confluence_macros, {})]
BUILTIN_HTML_PLUGINS = [(confluence_adf, {})]
