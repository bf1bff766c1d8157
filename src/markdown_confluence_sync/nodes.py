"""HTML-like element tree consumed by the ADF compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal

NodeType = Literal["root", "element", "text"]


@dataclass
class Node:
    """A node in the element tree.

    ``tag_name`` is only set on elements and ``value`` only on text nodes.
    ``attributes`` holds element properties such as a link's ``href``.
    """

    type: NodeType
    tag_name: str | None = None
    children: list[Node] = field(default_factory=list)
    value: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def walk(self) -> Iterable[Node]:
        """Iterate this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


def root(children: Iterable[Node] = ()) -> Node:
    return Node(type="root", children=list(children))


def element(
    tag_name: str,
    children: Iterable[Node] = (),
    attributes: dict[str, Any] | None = None,
) -> Node:
    return Node(
        type="element",
        tag_name=tag_name,
        children=list(children),
        attributes=dict(attributes or {}),
    )


def text(value: str) -> Node:
    return Node(type="text", value=value)
