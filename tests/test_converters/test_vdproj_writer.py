"""Tests for the vdproj writer."""

import io

import pytest
from vdproj_xml.converters.vdproj_writer import VdprojWriter, format_element
from vdproj_xml.errors import MalformedLineError, UnbalancedStructureError
from vdproj_xml.ir import Close, EmptyBlock, InlineValue, Open
from vdproj_xml.models import ConversionOptions

from tests.fixtures.sample_vdproj import EMPTY_BLOCK_VDPROJ, NESTED_VDPROJ

NESTED_EVENTS = [
    Open("Outer"),
    Open("Inner", InlineValue("3", "1")),
    Close(),
    Close(),
]


def render(events: list, options: ConversionOptions | None = None) -> str:
    """Write events and return the text."""
    output = io.StringIO()
    VdprojWriter(output, options).write_all(events)
    return output.getvalue()


class TestFormatElement:
    """Tests for format_element()."""

    def test_keyed_value(self) -> None:
        """Should write name, type and value."""
        assert format_element(Open("ProductName", InlineValue("8", "MyApp"))) == (
            '"ProductName" = "8:MyApp"'
        )

    def test_name_only(self) -> None:
        """Should write a bare quoted name."""
        assert format_element(Open("Hierarchy")) == '"Hierarchy"'

    def test_keyless_entry(self) -> None:
        """Should join type and value with a colon."""
        event = Open.keyless_entry("{EDC2488A}", ".NETFramework,Version=v4.5.2")
        assert format_element(event) == '"{EDC2488A}:.NETFramework,Version=v4.5.2"'

    def test_escapes(self) -> None:
        """Should escape quotes and backslashes in names and values."""
        event = Open('We"ird', InlineValue("8", "C:\\Temp\\"))
        assert format_element(event) == '"We\\"ird" = "8:C:\\\\Temp\\\\"'

    def test_keyless_without_value(self) -> None:
        """Should reject a keyless entry without a value."""
        with pytest.raises(MalformedLineError):
            format_element(Open("NoKeyEntry", keyless=True))

    @pytest.mark.parametrize("text", ["two\nlines", "cr\rhere"])
    def test_line_break(self, text: str) -> None:
        """Should reject values that would span lines."""
        with pytest.raises(MalformedLineError):
            format_element(Open("A", InlineValue("8", text)))


class TestVdprojWriter:
    """Tests for VdprojWriter."""

    def test_default_newline_is_crlf(self) -> None:
        """Should end lines with CRLF by default."""
        text = render([Open("ProductName", InlineValue("8", "MyApp")), Close()])
        assert text == '"ProductName" = "8:MyApp"\r\n'

    def test_nested_layout(self, unix_options: ConversionOptions) -> None:
        """Should indent four spaces per enclosing block."""
        assert render(NESTED_EVENTS, unix_options) == NESTED_VDPROJ

    def test_visual_studio_layout(self, visual_studio_options: ConversionOptions) -> None:
        """Should write leaf lines at the column of the enclosing braces."""
        assert render(NESTED_EVENTS, visual_studio_options) == (
            '"Outer"\n{\n"Inner" = "3:1"\n}\n'
        )

    def test_visual_studio_layout_deeper(
        self, visual_studio_options: ConversionOptions
    ) -> None:
        """Should indent nested blocks but keep leaves at the brace column."""
        events = [
            Open("A"),
            Open("B"),
            Open("C", InlineValue("3", "1")),
            Close(),
            Close(),
            Close(),
        ]
        assert render(events, visual_studio_options) == (
            '"A"\n{\n    "B"\n    {\n    "C" = "3:1"\n    }\n}\n'
        )

    def test_visual_studio_section_after_values(
        self, visual_studio_options: ConversionOptions
    ) -> None:
        """Should write a section name that follows value lines at their column."""
        events = [
            Open("A"),
            Open("X", InlineValue("3", "1")),
            Close(),
            Open("B"),
            Open("C", InlineValue("3", "2")),
            Close(),
            Close(),
            Close(),
        ]
        assert render(events, visual_studio_options) == (
            '"A"\n{\n"X" = "3:1"\n"B"\n    {\n    "C" = "3:2"\n    }\n}\n'
        )

    def test_empty_block(self, unix_options: ConversionOptions) -> None:
        """Should write an empty block as an opening and closing brace."""
        events = [Open("Outer"), Open("Empty"), EmptyBlock(), Close(), Close()]
        assert render(events, unix_options) == EMPTY_BLOCK_VDPROJ

    def test_keyless_entry_with_block(self, unix_options: ConversionOptions) -> None:
        """Should give a keyless entry its own block."""
        events = [
            Open.keyless_entry("{GUID}", "_ID"),
            Open("TargetName", InlineValue("8", "MyApp.exe")),
            Close(),
            Close(),
        ]
        assert render(events, unix_options) == (
            '"{GUID}:_ID"\n{\n    "TargetName" = "8:MyApp.exe"\n}\n'
        )

    def test_lines_written(self, unix_options: ConversionOptions) -> None:
        """Should count every line."""
        output = io.StringIO()
        writer = VdprojWriter(output, unix_options)
        writer.write_all(NESTED_EVENTS)
        assert writer.lines_written == 4

    def test_value_with_children(self) -> None:
        """Should reject a block under an element with a value."""
        events = [Open("A", InlineValue("8", "x")), Open("B"), Close(), Close()]
        with pytest.raises(MalformedLineError, match="inline value"):
            render(events)

    def test_value_with_empty_block(self) -> None:
        """Should reject an empty block on an element with a value."""
        with pytest.raises(MalformedLineError):
            render([Open("A", InlineValue("8", "x")), EmptyBlock(), Close()])

    def test_close_without_open(self) -> None:
        """Should reject an unmatched close."""
        with pytest.raises(UnbalancedStructureError):
            render([Close()])

    def test_empty_block_without_open(self) -> None:
        """Should reject an empty block that does not follow an element."""
        with pytest.raises(UnbalancedStructureError):
            render([Open("A"), Open("B"), Close(), EmptyBlock()])

    def test_unclosed(self) -> None:
        """Should reject a document with open elements."""
        with pytest.raises(UnbalancedStructureError, match="not closed"):
            render([Open("A"), Open("B"), Close()])
