"""Example configuration.

Copy to your project root as ``markdown-confluence-sync.config.py``. Public
module-level names become configuration fields; names the transformer does
not know about are left for other tools.
"""

from markdown_confluence_sync.logging_config import get_logger

_logger = get_logger("examples")


def heading_counter(options):
    """Count headings in the Markdown tree and store the total in file.data."""

    def transformer(tree, file):
        count = sum(1 for node in tree.walk() if node.type == "heading")
        file.data["heading_count"] = count
        _logger.info(f"Found {count} headings")

    return transformer


def link_target(options):
    """Set a default target attribute on links in the element tree."""
    target = options.get("target", "_blank")

    def transformer(tree, file):
        for node in tree.walk():
            if node.type == "element" and node.tag_name == "a":
                node.attributes.setdefault("target", target)

    return transformer


confluence_base_url = "https://confluence.example.com"
space_key = "DOCS"

logging = {"level": "INFO"}

markdown_plugins_before = [[heading_counter, {"enabled": True}]]
markdown_plugins_after = []
html_plugins_before = [[link_target, {"target": "_self"}]]
html_plugins_after = []
