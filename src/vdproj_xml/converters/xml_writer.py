"""Write the canonical element stream as XML."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO
from xml.sax.saxutils import XMLGenerator
from xml.sax.xmlreader import AttributesImpl

from vdproj_xml.encoding.names import encode_name
from vdproj_xml.errors import UnbalancedStructureError
from vdproj_xml.ir.events import (
    NO_KEY_ENTRY,
    VALUE_ATTRIBUTE,
    VALUE_TYPE_ATTRIBUTE,
    Close,
    EmptyBlock,
    Event,
    Open,
)
from vdproj_xml.models.options import ConversionOptions

# Text of an element that had an empty `{ }` block; keeps it from being
# written as a self-closing tag.
EMPTY_BLOCK_TEXT = " "


class _XMLGenerator(XMLGenerator):
    def startDocument(self) -> None:  # noqa: N802
        # No newline after the declaration; pretty-printing adds its own.
        self._write(f'<?xml version="1.0" encoding="{self._encoding}"?>')


def element_tag(event: Open) -> str:
    """Return the XML tag for an element."""
    if event.keyless:
        return NO_KEY_ENTRY
    return encode_name(event.name)


def element_attributes(event: Open) -> dict[str, str]:
    """Return the XML attributes for an element, `valueType` first."""
    if event.value is None:
        return {}
    return {
        VALUE_TYPE_ATTRIBUTE: event.value.value_type,
        VALUE_ATTRIBUTE: event.value.value,
    }


class XmlWriter:
    """Render events as an XML document.

    Usage:
        writer = XmlWriter(output, ConversionOptions(pretty_print=True))
        writer.write_all(events)
    """

    def __init__(self, output: TextIO, options: ConversionOptions | None = None) -> None:
        """Initialize the writer.

        Args:
        ----
            output: Text stream to write to.
            options: Conversion options (pretty-printing, indent, newline).

        """
        options = options or ConversionOptions()
        self._generator = _XMLGenerator(output, encoding="utf-8", short_empty_elements=True)
        self._pretty = options.pretty_print
        self._indent = options.indent
        self._newline = options.newline
        # (tag, has_children) per open element
        self._stack: list[tuple[str, bool]] = []
        self._started = False
        self._seen_root = False
        self.elements_written = 0

    def write(self, event: Event) -> None:
        """Consume one event."""
        if isinstance(event, Open):
            self.open(event)
        elif isinstance(event, EmptyBlock):
            self.empty_block()
        elif isinstance(event, Close):
            self.close()

    def write_all(self, events: Iterable[Event]) -> None:
        """Consume a complete document and end it."""
        for event in events:
            self.write(event)
        self.finish()

    def open(self, event: Open) -> None:
        """Write a start tag."""
        if not self._started:
            self._generator.startDocument()
            self._started = True

        if self._stack:
            tag, _ = self._stack[-1]
            self._stack[-1] = (tag, True)
        elif self._seen_root:
            raise UnbalancedStructureError(
                f"Second top-level element {event.name!r}; an XML document has one root"
            )

        tag = element_tag(event)
        if self._pretty:
            self._generator.ignorableWhitespace(self._newline + self._indent * len(self._stack))
        self._generator.startElement(tag, AttributesImpl(element_attributes(event)))
        self._stack.append((tag, False))
        self._seen_root = True
        self.elements_written += 1

    def empty_block(self) -> None:
        """Mark the current element as having an empty block."""
        if not self._stack:
            raise UnbalancedStructureError("Empty block outside of any element")
        self._generator.characters(EMPTY_BLOCK_TEXT)

    def close(self) -> None:
        """Write an end tag (or finish an empty element)."""
        if not self._stack:
            raise UnbalancedStructureError("Close without a matching open")
        tag, has_children = self._stack.pop()
        if self._pretty and has_children:
            self._generator.ignorableWhitespace(self._newline + self._indent * len(self._stack))
        self._generator.endElement(tag)

    def finish(self) -> None:
        """End the document.

        Raises
        ------
            UnbalancedStructureError: If the document is empty or elements
                are still open.

        """
        if self._stack:
            raise UnbalancedStructureError(f"{len(self._stack)} element(s) not closed")
        if not self._seen_root:
            raise UnbalancedStructureError("Document has no elements")
        self._generator.endDocument()
