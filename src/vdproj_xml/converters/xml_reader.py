"""Read an XML document back into the canonical element stream.

Uses expat directly so the document is never held in memory: input is fed
in chunks and the events produced by each chunk are yielded before the next
one is read.
"""

from __future__ import annotations

import xml.parsers.expat
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from vdproj_xml.encoding.names import decode_name, encode_name, has_ambiguous_escape
from vdproj_xml.errors import InvalidXmlNameError, MalformedXmlError, SourceLocation
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

CHUNK_SIZE = 64 * 1024


@dataclass
class _OpenElement:
    keyed_value: bool
    has_children: bool = False
    text: str = ""


class XmlEventSource:
    """Expat handlers that translate XML into canonical events."""

    def __init__(self, parser: xml.parsers.expat.XMLParserType) -> None:
        """Initialize the handlers and attach them to `parser`."""
        self._parser = parser
        self._stack: list[_OpenElement] = []
        self.events: deque[Event] = deque()

        parser.ordered_attributes = False
        parser.specified_attributes = True
        parser.StartElementHandler = self.start_element
        parser.EndElementHandler = self.end_element
        parser.CharacterDataHandler = self.characters

    def _location(self) -> SourceLocation:
        return SourceLocation(
            line=self._parser.CurrentLineNumber,
            column=self._parser.CurrentColumnNumber + 1,
        )

    def start_element(self, name: str, attrs: dict[str, str]) -> None:
        if self._stack:
            parent = self._stack[-1]
            if parent.keyed_value:
                raise MalformedXmlError(
                    "An element with a value cannot have child elements",
                    self._location(),
                )
            parent.has_children = True

        event = self._open_event(name, attrs)
        self._stack.append(_OpenElement(keyed_value=event.value is not None and not event.keyless))
        self.events.append(event)

    def end_element(self, name: str) -> None:
        element = self._stack.pop()
        if not element.has_children and element.text:
            if element.keyed_value:
                raise MalformedXmlError(
                    "An element with a value cannot have a block",
                    self._location(),
                )
            self.events.append(EmptyBlock())
        self.events.append(Close())

    def characters(self, content: str) -> None:
        if content.strip():
            raise MalformedXmlError(
                f"Unexpected text content: {content.strip()!r}",
                self._location(),
                suggestion="Values belong in the 'value' attribute",
            )
        if self._stack:
            self._stack[-1].text += content

    def _open_event(self, tag: str, attrs: dict[str, str]) -> Open:
        value_type = attrs.get(VALUE_TYPE_ATTRIBUTE)
        value = attrs.get(VALUE_ATTRIBUTE)

        if tag == NO_KEY_ENTRY:
            if value_type is None or value is None:
                raise MalformedXmlError(
                    f"<{NO_KEY_ENTRY}> needs both '{VALUE_TYPE_ATTRIBUTE}' and '{VALUE_ATTRIBUTE}'",
                    self._location(),
                )
            if ":" in value_type:
                raise MalformedXmlError(
                    f"Keyless entry type cannot contain ':': {value_type!r}",
                    self._location(),
                )
            return Open.keyless_entry(value_type, value)

        name = decode_name(tag)
        if has_ambiguous_escape(tag) or decode_name(encode_name(name)) != name:
            raise InvalidXmlNameError(
                f"Element name {tag!r} does not map back to a single key",
                self._location(),
                suggestion=f"Write the key {name!r} as {encode_name(name)!r}",
            )

        if value_type is None and value is None:
            if ":" in name:
                raise InvalidXmlNameError(
                    f"Key {name!r} without a value would be read back as a keyless entry",
                    self._location(),
                )
            return Open(name)

        if value_type is None or value is None:
            raise MalformedXmlError(
                f"<{tag}> needs both '{VALUE_TYPE_ATTRIBUTE}' and '{VALUE_ATTRIBUTE}' or neither",
                self._location(),
            )
        if not (value_type.isascii() and value_type.isdigit()):
            raise MalformedXmlError(
                f"'{VALUE_TYPE_ATTRIBUTE}' must be an unsigned integer, got {value_type!r}",
                self._location(),
            )
        return Open(name, InlineValue(value_type, value))


def setup_parser() -> tuple[xml.parsers.expat.XMLParserType, XmlEventSource]:
    """Create an expat parser wired to a fresh `XmlEventSource`."""
    parser = xml.parsers.expat.ParserCreate()
    return parser, XmlEventSource(parser)


def read_xml_events(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[Event]:
    """Parse an XML document into canonical events.

    Args:
    ----
        stream: Binary stream positioned at the start of the document.
        chunk_size: Number of bytes fed to the parser at a time.

    Yields:
    ------
        Canonical events in document order.

    Raises:
    ------
        MalformedXmlError: If the document is not well-formed or does not
            follow the element/attribute mapping.
        InvalidXmlNameError: If an element name does not decode to a key.

    """
    parser, source = setup_parser()

    while True:
        chunk = stream.read(chunk_size)
        try:
            parser.Parse(chunk, not chunk)
        except xml.parsers.expat.ExpatError as err:
            raise MalformedXmlError(
                xml.parsers.expat.errors.messages[err.code],
                SourceLocation(line=err.lineno, column=err.offset + 1),
            ) from err
        while source.events:
            yield source.events.popleft()
        if not chunk:
            break
