"""Convert a page with custom plugins and print the ADF document.

Run with ``python examples/custom_plugin.py``. The transformer is given its
plugins directly, so no configuration file is read.
"""

import json

from markdown_confluence_sync.config import TransformerOptions
from markdown_confluence_sync.transformer import ConfluencePageTransformer

SAMPLE = """\
# Release notes

## Fixed

- Links in tables keep their targets
- Empty pages convert cleanly
"""


def heading_counter(options):
    """Store the number of headings at or above ``max_depth`` in file.data."""
    max_depth = options.get("max_depth", 6)

    def transformer(tree, file):
        file.data["heading_count"] = sum(
            1 for node in tree.walk() if node.type == "heading" and int(node.tag[1:]) <= max_depth
        )

    return transformer


def item_marker(options):
    """Prefix the first text of every list item with a marker."""
    marker = options.get("marker", "*")

    def transformer(tree, file):
        for node in tree.walk():
            if node.type == "element" and node.tag_name == "li":
                for child in node.walk():
                    if child.type == "text":
                        child.value = f"{marker} {child.value}"
                        break

    return transformer


def build_transformer(marker="*"):
    return ConfluencePageTransformer(
        TransformerOptions(
            markdown_plugins_before=[[heading_counter, {"max_depth": 2}]],
            html_plugins_before=[[item_marker, {"marker": marker}]],
        ),
        config={},
    )


def main():
    print(json.dumps(build_transformer().transform(SAMPLE), indent=2))


if __name__ == "__main__":
    main()
