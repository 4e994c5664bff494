"""Parse vdproj text into the canonical element stream.

The format is one token per line:

    "DeployProject"
    {
    "VSVersion" = "3:800"
    "{3C67513D-01DD-4637-8A68-80971EB9504F}:_7B2B3C4D5E6F"
        {
        }
    }

Parsing is a small state machine: `parse_line` maps the current state and
one line to the next state and the events that line produces. It keeps no
global state, so it can be driven from any line source.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from vdproj_xml.encoding.escape import unescape
from vdproj_xml.errors import MalformedLineError, SourceLocation, UnbalancedStructureError
from vdproj_xml.ir.events import Close, EmptyBlock, Event, InlineValue, Open

logger = logging.getLogger(__name__)

_QUOTED = r'"((?:[^"\\]|\\.)*)"'

# "key" or "key" = "8:value"
ELEMENT_PATTERN = re.compile(_QUOTED + r'(?:\s*=\s*"([0-9]+):((?:[^"\\]|\\.)*)")?', re.DOTALL)

# A keyed line whose value does not start with a numeric type tag.
_BAD_VALUE_PATTERN = re.compile(_QUOTED + r'\s*=\s*"', re.DOTALL)

OPEN_BRACE = "{"
CLOSE_BRACE = "}"


@dataclass(frozen=True)
class ParserState:
    """State carried from one line to the next."""

    previous_line_was_element_open: bool = False
    """The previous line opened an element that has not been closed yet."""

    previous_raw_line: str | None = None
    """The previous non-blank line, trimmed."""

    depth: int = 0
    """Number of open elements, including one pending from the previous line."""

    line_number: int = 0

    open_has_value: bool = False
    """The pending element is keyed and carries an inline value."""


def _location(state: ParserState) -> SourceLocation:
    return SourceLocation(line=state.line_number)


def parse_element(line: str) -> Open | None:
    """Parse a trimmed element line, or return None if it is not one.

    Keyless entries are recognised by a colon in a value-less name:
    `"BootstrapperCfg:{63ACBE69-63AA-4F98-B2B6-99F9E24495F2}"` yields a
    keyless `Open` with value type `BootstrapperCfg`.
    """
    match = ELEMENT_PATTERN.fullmatch(line)
    if match is None:
        return None

    name, value_type, value = match.groups()

    if value_type is None:
        if ":" in name:
            keyless_type, keyless_value = name.split(":", 1)
            return Open.keyless_entry(unescape(keyless_type), unescape(keyless_value))
        return Open(unescape(name))

    return Open(unescape(name), InlineValue(value_type, unescape(value)))


def parse_line(state: ParserState, line: str) -> tuple[ParserState, list[Event]]:
    """Advance the parser by one line.

    Args:
    ----
        state: State after the previous line.
        line: The next input line (surrounding whitespace is ignored).

    Returns:
    -------
        The new state and the events produced by this line.

    Raises:
    ------
        MalformedLineError: If the line is not an element, `{` or `}`.
        UnbalancedStructureError: If a brace has nothing to open or close.

    """
    state = replace(state, line_number=state.line_number + 1)
    line = line.strip()
    if not line:
        return state, []

    events: list[Event] = []
    depth = state.depth

    element = parse_element(line)
    if element is not None:
        if state.previous_line_was_element_open:
            events.append(Close())
            depth -= 1
        events.append(element)
        return (
            replace(
                state,
                previous_line_was_element_open=True,
                previous_raw_line=line,
                depth=depth + 1,
                open_has_value=element.value is not None and not element.keyless,
            ),
            events,
        )

    if line == OPEN_BRACE:
        if not state.previous_line_was_element_open:
            raise UnbalancedStructureError(
                "'{' does not follow an element name", _location(state)
            )
        if state.open_has_value:
            raise MalformedLineError(
                "'{' follows an element with an inline value",
                _location(state),
                suggestion="Elements with a value cannot have children",
            )
    elif line == CLOSE_BRACE:
        if state.previous_line_was_element_open:
            events.append(Close())
            depth -= 1
        if depth == 0:
            raise UnbalancedStructureError("'}' without a matching '{'", _location(state))
        if state.previous_raw_line == OPEN_BRACE:
            events.append(EmptyBlock())
        events.append(Close())
        depth -= 1
    else:
        raise _malformed(line, state)

    return (
        replace(
            state,
            previous_line_was_element_open=False,
            previous_raw_line=line,
            depth=depth,
            open_has_value=False,
        ),
        events,
    )


def _malformed(line: str, state: ParserState) -> MalformedLineError:
    if _BAD_VALUE_PATTERN.match(line):
        return MalformedLineError(
            "Inline value does not start with a numeric type",
            _location(state),
            suggestion='Write values as "<type>:<value>", e.g. "8:MyApp"',
        )
    return MalformedLineError(
        f"Expected a quoted element, '{{' or '}}', got: {line}",
        _location(state),
    )


def finish(state: ParserState) -> list[Event]:
    """Return the events that end the document.

    Raises
    ------
        UnbalancedStructureError: If elements are still open.

    """
    events: list[Event] = []
    depth = state.depth
    if state.previous_line_was_element_open:
        events.append(Close())
        depth -= 1
    if depth:
        raise UnbalancedStructureError(
            f"{depth} element(s) not closed at end of input",
            SourceLocation(line=state.line_number),
            suggestion="Add the missing '}' lines",
        )
    return events


def parse_lines(lines: Iterable[str]) -> Iterator[Event]:
    """Parse vdproj lines into a stream of events.

    Args:
    ----
        lines: Input lines, with or without line terminators.

    Yields:
    ------
        Canonical events in document order.

    """
    state = ParserState()
    for line in lines:
        state, events = parse_line(state, line)
        yield from events
    yield from finish(state)
    logger.debug("Parsed %d vdproj lines", state.line_number)
