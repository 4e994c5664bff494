"""Write the canonical element stream as vdproj text."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from vdproj_xml.encoding.escape import escape
from vdproj_xml.errors import MalformedLineError, UnbalancedStructureError
from vdproj_xml.ir.events import Close, EmptyBlock, Event, Open
from vdproj_xml.models.options import ConversionOptions, VdprojLayout

INDENT = "    "


def format_element(event: Open) -> str:
    """Format the line of an element, without indentation or newline.

    Raises
    ------
        MalformedLineError: If the name or value contains a line break, or
            a keyless entry has no value.

    """
    texts = [event.name]
    if event.value is not None:
        texts += [event.value.value_type, event.value.value]
    for text in texts:
        if "\n" in text or "\r" in text:
            raise MalformedLineError(
                f"Cannot write a line break inside a vdproj string: {text!r}",
                suggestion="vdproj strings must fit on one line",
            )

    if event.keyless:
        if event.value is None:
            raise MalformedLineError("A keyless entry needs a type and a value")
        return f'"{escape(event.value.value_type)}:{escape(event.value.value)}"'
    if event.value is None:
        return f'"{escape(event.name)}"'
    return f'"{escape(event.name)}" = "{event.value.value_type}:{escape(event.value.value)}"'


class VdprojWriter:
    """Render events as vdproj lines.

    Whether an element gets a `{ }` block is only known from the event that
    follows its `Open`, so each `Open` is held back by one event.

    Usage:
        writer = VdprojWriter(output)
        writer.write_all(events)
    """

    def __init__(self, output: TextIO, options: ConversionOptions | None = None) -> None:
        """Initialize the writer.

        Args:
        ----
            output: Text stream to write to.
            options: Conversion options (newline sequence and layout).

        """
        options = options or ConversionOptions()
        self._output = output
        self._newline = options.newline
        self._layout = options.vdproj_layout
        self._pending: Open | None = None
        # One entry per open block: whether a value line has been written in it
        self._blocks: list[bool] = []
        self.lines_written = 0

    def write(self, event: Event) -> None:
        """Consume one event."""
        if isinstance(event, Open):
            self.open(event)
        elif isinstance(event, EmptyBlock):
            self.empty_block()
        elif isinstance(event, Close):
            self.close()

    def write_all(self, events: Iterable[Event]) -> None:
        """Consume a complete document and check that it is balanced."""
        for event in events:
            self.write(event)
        self.finish()

    def open(self, event: Open) -> None:
        """Begin an element."""
        self._flush_pending_as_block()
        self._pending = event

    def empty_block(self) -> None:
        """Give the pending element an empty block."""
        if self._pending is None:
            raise UnbalancedStructureError("Empty block must directly follow an element")
        self._flush_pending_as_block()

    def close(self) -> None:
        """End the innermost open element."""
        if self._pending is not None:
            self._write_line(self._leaf_indent(), format_element(self._pending))
            self._pending = None
            if self._blocks:
                self._blocks[-1] = True
            return

        if not self._blocks:
            raise UnbalancedStructureError("Close without a matching open")
        self._blocks.pop()
        self._write_line(len(self._blocks), "}")

    def finish(self) -> None:
        """Check that every element has been closed."""
        open_count = len(self._blocks) + (1 if self._pending is not None else 0)
        if open_count:
            raise UnbalancedStructureError(f"{open_count} element(s) not closed")

    def _flush_pending_as_block(self) -> None:
        if self._pending is None:
            return
        if self._pending.value is not None and not self._pending.keyless:
            raise MalformedLineError(
                f"Element {self._pending.name!r} has an inline value and cannot have a block",
                suggestion="Elements with a value cannot have children",
            )
        depth = len(self._blocks)
        name_level = depth
        # Visual Studio writes a section name that follows value lines at
        # their column, and its braces one level in.
        if self._layout is VdprojLayout.VISUAL_STUDIO and self._blocks and self._blocks[-1]:
            name_level -= 1
        self._write_line(name_level, format_element(self._pending))
        self._write_line(depth, "{")
        self._pending = None
        self._blocks.append(False)

    def _leaf_indent(self) -> int:
        # Visual Studio writes value lines at the column of the enclosing braces.
        depth = len(self._blocks)
        if self._layout is VdprojLayout.VISUAL_STUDIO:
            return max(depth - 1, 0)
        return depth

    def _write_line(self, level: int, text: str) -> None:
        self._output.write(INDENT * level + text + self._newline)
        self.lines_written += 1
