"""Tests for the ADF compiler."""

import json

import pytest

from markdown_confluence_sync.adf import (
    DEFAULT_CODE_LANGUAGE,
    AdfCompiler,
    compile_adf,
    convert_node,
    extract_text,
)
from markdown_confluence_sync.nodes import Node, element, root, text
from markdown_confluence_sync.pipeline import ProcessingFile


class TestDocument:
    """Tests for the top-level document."""

    def test_simple_paragraph(self) -> None:
        """A single paragraph compiles to a one-paragraph doc."""
        tree = root([element("p", [text("Hello world")])])

        assert compile_adf(tree) == {
            "version": 1,
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "Hello world"}]}
            ],
        }

    def test_empty_root(self) -> None:
        """A root without children has empty content."""
        assert compile_adf(root()) == {"version": 1, "type": "doc", "content": []}

    def test_none_tree(self) -> None:
        """A missing tree degrades to an empty document."""
        assert compile_adf(None)["content"] == []

    def test_deterministic(self) -> None:
        """Identical input produces identical output."""

        def build() -> Node:
            return root(
                [
                    element("h2", [text("Title")]),
                    element("ul", [element("li", [text("a")]), element("li", [text("b")])]),
                    element("p", [element("a", [text("x")], {"href": "https://x"})]),
                ]
            )

        first = json.dumps(compile_adf(build()), sort_keys=True)
        second = json.dumps(compile_adf(build()), sort_keys=True)

        assert first == second


class TestBlocks:
    """Tests for block-level elements."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_level(self, level: int) -> None:
        """Heading level comes from the tag name."""
        node = convert_node(element(f"h{level}", [text("Title")]))

        assert node == {
            "type": "heading",
            "attrs": {"level": level},
            "content": [{"type": "text", "text": "Title"}],
        }

    def test_bullet_list(self) -> None:
        """Unordered list items are wrapped in listItem nodes."""
        tree = root([element("ul", [element("li", [text("one")]), element("li", [text("two")])])])

        content = compile_adf(tree)["content"]

        assert content == [
            {
                "type": "bulletList",
                "content": [
                    {
                        "type": "listItem",
                        "content": [
                            {"type": "paragraph", "content": [{"type": "text", "text": "one"}]}
                        ],
                    },
                    {
                        "type": "listItem",
                        "content": [
                            {"type": "paragraph", "content": [{"type": "text", "text": "two"}]}
                        ],
                    },
                ],
            }
        ]

    def test_ordered_list(self) -> None:
        """Ordered lists become orderedList nodes."""
        node = convert_node(element("ol", [element("li", [text("first")])]))

        assert node["type"] == "orderedList"
        assert node["content"][0]["type"] == "listItem"

    def test_list_item_collapses_to_paragraph(self) -> None:
        """Block children of a list item end up in a single paragraph."""
        item = element("li", [element("p", [text("a")]), element("p", [text("b")])])

        node = convert_node(item)

        assert node == {
            "type": "paragraph",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "a"}]},
                {"type": "paragraph", "content": [{"type": "text", "text": "b"}]},
            ],
        }

    def test_code_block(self) -> None:
        """Preformatted blocks become codeBlock nodes with the default language."""
        pre = element("pre", [element("code", [text("x = 1\n")], {"class": "language-python"})])

        node = convert_node(pre)

        assert node == {
            "type": "codeBlock",
            "attrs": {"language": DEFAULT_CODE_LANGUAGE},
            "content": [{"type": "text", "text": "x = 1\n"}],
        }


class TestInline:
    """Tests for inline marks."""

    @pytest.mark.parametrize(
        "tag,mark",
        [("strong", "strong"), ("b", "strong"), ("em", "em"), ("i", "em"), ("code", "code")],
    )
    def test_marks(self, tag: str, mark: str) -> None:
        """Formatting tags become marked text nodes."""
        node = convert_node(element(tag, [text("word")]))

        assert node == {"type": "text", "text": "word", "marks": [{"type": mark}]}

    def test_link_with_href(self) -> None:
        """Links carry their href in a link mark."""
        node = convert_node(element("a", [text("Example")], {"href": "https://example.com"}))

        assert node == {
            "type": "text",
            "text": "Example",
            "marks": [{"type": "link", "attrs": {"href": "https://example.com"}}],
        }

    def test_link_without_href(self) -> None:
        """Links without an href point to '#'."""
        node = convert_node(element("a", [text("nowhere")]))

        assert node["marks"] == [{"type": "link", "attrs": {"href": "#"}}]

    def test_nested_marks_are_flattened(self) -> None:
        """Formatting inside a link is reduced to plain text."""
        link = element(
            "a",
            [text("see "), element("strong", [text("this")])],
            {"href": "/page"},
        )

        node = convert_node(link)

        assert node["text"] == "see this"
        assert node["marks"] == [{"type": "link", "attrs": {"href": "/page"}}]

    def test_text_without_value(self) -> None:
        """Text nodes without a value produce empty text."""
        assert convert_node(Node(type="text")) == {"type": "text", "text": ""}


class TestUnknownElements:
    """Tests for elements without an ADF counterpart."""

    def test_children_are_promoted(self) -> None:
        """Unknown wrappers disappear and their children take their place."""
        tree = root([element("p", [element("span", [text("a"), text("b")])])])

        paragraph = compile_adf(tree)["content"][0]

        assert paragraph["content"] == [
            {"type": "text", "text": "a"},
            {"type": "text", "text": "b"},
        ]

    def test_unknown_at_root(self) -> None:
        """Unknown elements at the root promote their children to the document."""
        tree = root([element("blockquote", [element("p", [text("quoted")])])])

        assert compile_adf(tree)["content"] == [
            {"type": "paragraph", "content": [{"type": "text", "text": "quoted"}]}
        ]

    def test_unknown_node_type(self) -> None:
        """Nodes of an unknown type are dropped."""
        tree = root([Node(type="comment"), element("p", [text("kept")])])  # type: ignore[arg-type]

        assert len(compile_adf(tree)["content"]) == 1


class TestExtractText:
    """Tests for plain-text flattening."""

    def test_document_order(self) -> None:
        """Text is concatenated in document order."""
        node = element("p", [text("a"), element("em", [text("b"), element("code", [text("c")])]), text("d")])

        assert extract_text(node) == "abcd"

    def test_element_without_text(self) -> None:
        """Elements without text descendants yield an empty string."""
        assert extract_text(element("br")) == ""


class TestAdfCompiler:
    """Tests for the pipeline compiler."""

    def test_stores_document_in_file_data(self) -> None:
        """The compiled document is also stored on the file."""
        file = ProcessingFile(value="ignored")

        adf = AdfCompiler().compile(root([element("p", [text("x")])]), file)

        assert file.data["adf"] is adf
        assert adf["type"] == "doc"
