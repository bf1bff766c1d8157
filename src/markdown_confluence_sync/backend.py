"""Markdown parsing and conversion to the element tree.

The transformer only needs two capabilities from a backend: parsing Markdown
into a syntax tree and turning that syntax tree into an element tree. The
production backend uses markdown-it-py; tests inject their own.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from markdown_confluence_sync.nodes import Node, element, root, text

logger = logging.getLogger(__name__)

# GitHub-flavored extensions available in markdown-it core.
GFM_RULES = ["table", "strikethrough"]


class MarkdownBackend(Protocol):
    """Capabilities the transformer needs from a Markdown library."""

    def parse(self, markdown: str) -> Any: ...

    def to_html_tree(self, tree: Any) -> Node: ...


class MarkdownItBackend:
    """markdown-it-py backend producing :class:`SyntaxTreeNode` trees.

    The parser is created on first use and reused afterwards, so a single
    backend can be shared between transformer instances.
    """

    def __init__(self, preset: str = "commonmark", gfm: bool = True):
        self.preset = preset
        self.gfm = gfm
        self._md: MarkdownIt | None = None

    @property
    def md(self) -> MarkdownIt:
        if self._md is None:
            logger.debug(f"Creating markdown-it parser (preset={self.preset}, gfm={self.gfm})")
            md = MarkdownIt(self.preset)
            if self.gfm:
                md.enable(GFM_RULES)
            self._md = md
        return self._md

    def parse(self, markdown: str) -> SyntaxTreeNode:
        return SyntaxTreeNode(self.md.parse(markdown))

    def to_html_tree(self, tree: SyntaxTreeNode) -> Node:
        return root(_convert(tree))


def _convert(node: SyntaxTreeNode) -> list[Node]:
    """Convert a syntax tree node into zero or more element tree nodes."""
    node_type = node.type

    if node_type in ("root", "inline"):
        return _convert_children(node)

    if node_type == "text":
        return [text(node.content)]

    if node_type == "softbreak":
        return [text("\n")]

    if node_type == "hardbreak":
        return [element("br")]

    if node_type == "paragraph":
        # Paragraphs inside tight lists are not rendered as <p>.
        if node.hidden:
            return _convert_children(node)
        return [element("p", _convert_children(node))]

    if node_type == "code_inline":
        return [element("code", [text(node.content)])]

    if node_type in ("fence", "code_block"):
        language = node.info.strip().split(" ")[0] if node.info else ""
        attributes = {"class": f"language-{language}"} if language else {}
        code = element("code", [text(node.content)], attributes)
        return [element("pre", [code])]

    if node_type == "link":
        attributes = {"href": node.attrs.get("href", "")}
        if node.attrs.get("title"):
            attributes["title"] = node.attrs["title"]
        return [element("a", _convert_children(node), attributes)]

    if node_type == "image":
        attributes = {"src": node.attrs.get("src", ""), "alt": node.content}
        return [element("img", attributes=attributes)]

    if node_type == "ordered_list":
        attributes = {}
        start = node.attrs.get("start")
        if start is not None and int(start) != 1:
            attributes["start"] = int(start)
        return [element("ol", _convert_children(node), attributes)]

    if node_type == "s":
        return [element("del", _convert_children(node))]

    if node_type in ("html_block", "html_inline"):
        # Raw HTML is not carried into the element tree.
        return []

    if node.tag:
        return [element(node.tag, _convert_children(node), _tag_attributes(node.attrs))]

    return _convert_children(node)


def _convert_children(node: SyntaxTreeNode) -> list[Node]:
    children: list[Node] = []
    for child in node.children:
        children.extend(_convert(child))
    return children


def _tag_attributes(attrs: Mapping[str, Any]) -> dict[str, Any]:
    # Table cells carry their alignment as an inline style.
    return {key: value for key, value in attrs.items() if key == "style"}


def markdown_to_html_tree(backend: MarkdownBackend):
    """Build the plugin bridging the Markdown and element trees."""

    def attacher(options: Mapping[str, Any]):
        def transformer(tree: Any, file: Any) -> Node:
            return backend.to_html_tree(tree)

        return transformer

    attacher.display_name = "markdown_to_html_tree"
    return attacher
