"""Intermediate representation: the canonical element stream.

Events:
    Open: Begin an element, optionally with an inline value
    EmptyBlock: The open element has an explicit empty `{ }` block
    Close: End the innermost open element

Tree:
    Element: Materialized node, built with `build_tree`
"""

from vdproj_xml.ir.events import (
    NO_KEY_ENTRY,
    VALUE_ATTRIBUTE,
    VALUE_TYPE_ATTRIBUTE,
    Close,
    EmptyBlock,
    Event,
    InlineValue,
    Open,
)
from vdproj_xml.ir.tree import Element, TreeStats, build_tree, collect_stats, iter_events

__all__ = [
    "NO_KEY_ENTRY",
    "VALUE_ATTRIBUTE",
    "VALUE_TYPE_ATTRIBUTE",
    "Close",
    "Element",
    "EmptyBlock",
    "Event",
    "InlineValue",
    "Open",
    "TreeStats",
    "build_tree",
    "collect_stats",
    "iter_events",
]
