"""Conversion error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar


class ErrorKind(Enum):
    """Category of a conversion failure."""

    MALFORMED_LINE = "malformed-line"
    UNBALANCED_STRUCTURE = "unbalanced-structure"
    INVALID_XML_NAME = "invalid-xml-name"
    MALFORMED_XML = "malformed-xml"
    IO_FAILURE = "io-failure"

    @property
    def title(self) -> str:
        """Human-readable title (e.g., 'Malformed line')."""
        return _TITLES[self]


_TITLES: dict[ErrorKind, str] = {
    ErrorKind.MALFORMED_LINE: "Malformed line",
    ErrorKind.UNBALANCED_STRUCTURE: "Unbalanced structure",
    ErrorKind.INVALID_XML_NAME: "Invalid XML name",
    ErrorKind.MALFORMED_XML: "Malformed XML",
    ErrorKind.IO_FAILURE: "I/O failure",
}


@dataclass(frozen=True)
class SourceLocation:
    """Location in the input document where an error was found."""

    line: int | None = None
    """1-based line number (if available)."""

    column: int | None = None
    """1-based column number (if available)."""

    path: Path | None = None
    """Input file (if the input came from a file)."""

    def with_path(self, path: Path) -> SourceLocation:
        """Return a copy of this location attached to a file."""
        return SourceLocation(line=self.line, column=self.column, path=path)

    def __str__(self) -> str:
        """Format location as string."""
        parts: list[str] = []
        if self.path is not None:
            parts.append(str(self.path))
        if self.line is not None:
            if self.column is not None:
                parts.append(f"line {self.line}, col {self.column}")
            else:
                parts.append(f"line {self.line}")
        return ", ".join(parts) if parts else "unknown location"


class ConversionError(Exception):
    """Base class for all errors that abort a conversion."""

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        location: SourceLocation | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize ConversionError.

        Args:
        ----
            message: Error message describing what went wrong.
            location: Where in the input the error was detected.
            suggestion: Optional hint on how to fix the input.

        """
        self.message = message
        self.location = location
        self.suggestion = suggestion
        super().__init__(f"{location}: {message}" if location else message)

    def at_path(self, path: Path) -> ConversionError:
        """Attach the input file to this error's location and return it."""
        location = self.location or SourceLocation()
        self.location = location.with_path(path)
        self.args = (f"{self.location}: {self.message}",)
        return self


class MalformedLineError(ConversionError):
    """A vdproj line matches neither the element grammar nor a brace."""

    kind = ErrorKind.MALFORMED_LINE


class UnbalancedStructureError(ConversionError):
    """Elements left open at end of input, or a close with nothing open."""

    kind = ErrorKind.UNBALANCED_STRUCTURE


class InvalidXmlNameError(ConversionError):
    """A name has no XML form, or an XML name does not decode to a vdproj key."""

    kind = ErrorKind.INVALID_XML_NAME


class MalformedXmlError(ConversionError):
    """The XML input is not well-formed or does not follow the vdproj mapping."""

    kind = ErrorKind.MALFORMED_XML


class IoFailureError(ConversionError):
    """The input could not be read or the output could not be written."""

    kind = ErrorKind.IO_FAILURE
