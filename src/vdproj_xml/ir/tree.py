"""Materialized element tree.

Conversions never need this; it exists for inspection (`vdproj-xml info`)
and for comparing documents structurally.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from vdproj_xml.errors import UnbalancedStructureError
from vdproj_xml.ir.events import Close, EmptyBlock, Event, InlineValue, Open


@dataclass
class Element:
    """A vdproj element with its children in document order."""

    name: str
    value: InlineValue | None = None
    keyless: bool = False
    children: list[Element] = field(default_factory=list)
    has_block: bool = False
    """True if the element was written with `{ }` braces, even if empty."""

    def walk(self, depth: int = 0) -> Iterator[tuple[int, Element]]:
        """Yield (depth, element) pairs for this element and its descendants."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


def build_tree(events: Iterable[Event]) -> list[Element]:
    """Build the list of top-level elements from an event stream.

    Raises
    ------
        UnbalancedStructureError: If a close has nothing to close or
            elements remain open at the end.

    """
    roots: list[Element] = []
    stack: list[Element] = []

    for event in events:
        if isinstance(event, Open):
            element = Element(event.name, event.value, event.keyless)
            if stack:
                stack[-1].children.append(element)
                stack[-1].has_block = True
            else:
                roots.append(element)
            stack.append(element)
        elif isinstance(event, EmptyBlock):
            if not stack:
                raise UnbalancedStructureError("Empty block outside of any element")
            stack[-1].has_block = True
        elif isinstance(event, Close):
            if not stack:
                raise UnbalancedStructureError("Close without a matching open")
            stack.pop()

    if stack:
        raise UnbalancedStructureError(f"{len(stack)} element(s) not closed at end of input")

    return roots


def iter_events(elements: Iterable[Element]) -> Iterator[Event]:
    """Yield the event stream of a list of elements (inverse of `build_tree`)."""
    for element in elements:
        yield Open(element.name, element.value, element.keyless)
        if element.has_block and not element.children:
            yield EmptyBlock()
        yield from iter_events(element.children)
        yield Close()


@dataclass
class TreeStats:
    """Summary counts of a document."""

    elements: int = 0
    values: int = 0
    keyless: int = 0
    empty_blocks: int = 0
    max_depth: int = 0


def collect_stats(elements: Iterable[Element]) -> TreeStats:
    """Count elements, values and nesting depth of a document."""
    stats = TreeStats()
    for root in elements:
        for depth, element in root.walk(1):
            stats.elements += 1
            stats.max_depth = max(stats.max_depth, depth)
            if element.keyless:
                stats.keyless += 1
            elif element.value is not None:
                stats.values += 1
            if element.has_block and not element.children:
                stats.empty_blocks += 1
    return stats
