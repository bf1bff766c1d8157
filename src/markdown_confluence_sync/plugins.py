"""Merge, normalize and apply plugin entries.

A plugin entry is either a bare plugin, ``[plugin]`` or ``[plugin, options]``.
User plugins run around the built-in ones in the order
``before -> built-in -> after``.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Sequence

from markdown_confluence_sync.errors import InvalidPluginEntryError

if TYPE_CHECKING:
    from markdown_confluence_sync.pipeline import Processor

PluginEntry = Any
NormalizedEntry = tuple[Callable[..., Any], Mapping[str, Any]]


def merge_plugins(
    before: Sequence[PluginEntry] | None = None,
    builtin: Sequence[PluginEntry] | None = None,
    after: Sequence[PluginEntry] | None = None,
) -> list[PluginEntry]:
    """Concatenate plugin groups as ``before + builtin + after``.

    Missing groups count as empty. Entries are neither deduplicated nor
    validated.
    """
    return [*(before or []), *(builtin or []), *(after or [])]


def normalize_plugin_entry(entry: PluginEntry) -> NormalizedEntry:
    """Normalize a plugin entry to a ``(plugin, options)`` pair.

    Args:
        entry: A plugin, ``[plugin]`` or ``[plugin, options]``.

    Returns:
        Tuple of the plugin and its options (``{}`` when omitted).

    Raises:
        InvalidPluginEntryError: If the entry is none of the accepted shapes.
    """
    if callable(entry):
        return entry, {}

    if isinstance(entry, (list, tuple)) and entry:
        plugin = entry[0]
        options = entry[1] if len(entry) > 1 else {}
        return plugin, options

    raise InvalidPluginEntryError(f"Invalid plugin entry: {type(entry).__name__}")


def apply_plugins(processor: Processor, entries: Iterable[PluginEntry]) -> Processor:
    """Register each entry on ``processor`` in order.

    The first failing registration propagates and the remaining entries are
    not applied.
    """

    def use(current: Processor, entry: PluginEntry) -> Processor:
        plugin, options = normalize_plugin_entry(entry)
        return current.use(plugin, options)

    return reduce(use, entries, processor)


def plugin_name(plugin: Any) -> str:
    """Best-effort human readable name of a plugin."""
    name = getattr(plugin, "display_name", None) or getattr(plugin, "__name__", None)
    if not name or name == "<lambda>":
        return "anonymous"
    return name


def plugin_names(entries: Iterable[PluginEntry]) -> list[str]:
    return [plugin_name(normalize_plugin_entry(entry)[0]) for entry in entries]
