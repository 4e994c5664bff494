"""Canonical element stream shared by all readers and writers.

A document is a depth-first sequence of `Open`, `EmptyBlock` and `Close`
events. Readers produce it, writers consume it; neither side needs the whole
tree in memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Reserved name (and XML tag) of keyless entries such as
# "{EDC2488A-8267-493A-A98E-7D9C3B36CDF3}:.NETFramework,Version=v4.5.2".
NO_KEY_ENTRY = "NoKeyEntry"

VALUE_TYPE_ATTRIBUTE = "valueType"
VALUE_ATTRIBUTE = "value"


@dataclass(frozen=True)
class InlineValue:
    """The `"<type>:<value>"` part of an element line."""

    value_type: str
    """Type tag; digits for keyed elements (e.g. "8" for strings, "3" for integers)."""

    value: str
    """Raw (unescaped) value text."""


@dataclass(frozen=True)
class Open:
    """Begin an element."""

    name: str
    value: InlineValue | None = None
    keyless: bool = False

    @classmethod
    def keyless_entry(cls, value_type: str, value: str) -> Open:
        """Create the open event of a keyless entry."""
        return cls(NO_KEY_ENTRY, InlineValue(value_type, value), keyless=True)


@dataclass(frozen=True)
class EmptyBlock:
    """The innermost open element has an explicit but empty `{ }` block."""


@dataclass(frozen=True)
class Close:
    """End the innermost open element."""


Event = Union[Open, EmptyBlock, Close]
