"""Shared fixtures for transformer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from markdown_confluence_sync.nodes import Node, element, root, text


class FakeBackend:
    """Backend double: every document becomes a single paragraph."""

    def __init__(self) -> None:
        self.parsed: list[str] = []

    def parse(self, markdown: str) -> Node:
        self.parsed.append(markdown)
        children = [element("p", [text(markdown)])] if markdown else []
        return root(children)

    def to_html_tree(self, tree: Node) -> Node:
        return tree


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test in an empty directory so no config file is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def recorder(calls: list[str]):
    """Factory for plugins that append their label to ``calls`` when run."""

    def make(label: str):
        def plugin(options):
            def transformer(tree, file):
                calls.append(label)
                return tree

            return transformer

        plugin.__name__ = label
        return plugin

    return make
