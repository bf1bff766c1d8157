"""Compile an element tree to Atlassian Document Format (ADF)."""

from __future__ import annotations

from typing import Any

from markdown_confluence_sync.nodes import Node
from markdown_confluence_sync.pipeline import Compiler, ProcessingFile

ADFNode = dict[str, Any]
Converted = ADFNode | list[ADFNode] | None

ADF_VERSION = 1
# Language detection from code classes is not implemented.
DEFAULT_CODE_LANGUAGE = "javascript"

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
LIST_TYPES = {"ul": "bulletList", "ol": "orderedList"}
MARK_TYPES = {
    "strong": "strong",
    "b": "strong",
    "em": "em",
    "i": "em",
    "code": "code",
}


def compile_adf(tree: Node | None) -> ADFNode:
    """Compile an element tree into an ADF ``doc`` node.

    Args:
        tree: Root of the element tree.

    Returns:
        ADF document ``{"version": 1, "type": "doc", "content": [...]}``.
    """
    if tree is not None and tree.type == "root":
        content = convert_children(tree)
    else:
        content = _as_list(convert_node(tree))
    return {"version": ADF_VERSION, "type": "doc", "content": content}


def convert_node(node: Node | None) -> Converted:
    """Convert a single node.

    Returns a node, a list of nodes to be spliced into the parent's content,
    or ``None`` for input that produces nothing.
    """
    if node is None:
        return None

    if node.type == "root":
        return convert_children(node)

    if node.type == "element":
        return _convert_element(node)

    if node.type == "text":
        return {"type": "text", "text": node.value or ""}

    return None


def convert_children(node: Node) -> list[ADFNode]:
    """Convert the children of ``node``, flattening nested lists."""
    content: list[ADFNode] = []
    for child in node.children:
        content.extend(_as_list(convert_node(child)))
    return content


def extract_text(node: Node) -> str:
    """Concatenate the text of all descendant text nodes in document order."""
    if node.type == "text":
        return node.value or ""
    return "".join(extract_text(child) for child in node.children)


def _convert_element(node: Node) -> Converted:
    tag = node.tag_name

    if tag == "p" or tag == "li":
        # List items collapse to a single paragraph.
        return {"type": "paragraph", "content": convert_children(node)}

    if tag in HEADING_TAGS:
        return {
            "type": "heading",
            "attrs": {"level": int(tag[1])},
            "content": convert_children(node),
        }

    if tag in LIST_TYPES:
        return {
            "type": LIST_TYPES[tag],
            "content": [
                {"type": "listItem", "content": item if isinstance(item, list) else [item]}
                for item in convert_children(node)
            ],
        }

    if tag in MARK_TYPES:
        return _marked_text(node, {"type": MARK_TYPES[tag]})

    if tag == "pre":
        return {
            "type": "codeBlock",
            "attrs": {"language": DEFAULT_CODE_LANGUAGE},
            "content": [{"type": "text", "text": extract_text(node)}],
        }

    if tag == "a":
        href = node.attributes.get("href") or "#"
        return _marked_text(node, {"type": "link", "attrs": {"href": href}})

    # Unknown elements are transparent: their children take their place.
    return convert_children(node)


def _marked_text(node: Node, mark: ADFNode) -> ADFNode:
    # Nested formatting is flattened to plain text under a single mark.
    return {"type": "text", "text": extract_text(node), "marks": [mark]}


def _as_list(converted: Converted) -> list[ADFNode]:
    if converted is None:
        return []
    if isinstance(converted, list):
        return converted
    return [converted]


class AdfCompiler(Compiler):
    """Pipeline compiler producing an ADF document."""

    name = "confluence_adf"

    def compile(self, tree: Node, file: ProcessingFile) -> ADFNode:
        adf = compile_adf(tree)
        file.data["adf"] = adf
        return adf
