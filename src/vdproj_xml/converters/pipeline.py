"""Conversion entry points.

    vdproj -> XML:  parse_lines -> XmlWriter
    XML -> vdproj:  read_xml_events -> VdprojWriter

Both run in a single pass over their input.
"""

from __future__ import annotations

import io
import logging
import os
import stat
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import BinaryIO, TextIO

from vdproj_xml.converters.vdproj_reader import parse_lines
from vdproj_xml.converters.vdproj_writer import VdprojWriter
from vdproj_xml.converters.xml_reader import read_xml_events
from vdproj_xml.converters.xml_writer import XmlWriter
from vdproj_xml.errors import ConversionError, IoFailureError
from vdproj_xml.ir.events import Event
from vdproj_xml.models.options import ConversionOptions

logger = logging.getLogger(__name__)

VDPROJ_SUFFIX = ".vdproj"
XML_SUFFIX = ".xml"

# Visual Studio may write a byte order mark.
VDPROJ_INPUT_ENCODING = "utf-8-sig"


class Direction(Enum):
    """Conversion direction, chosen from the input file extension."""

    VDPROJ_TO_XML = "vdproj-to-xml"
    XML_TO_VDPROJ = "xml-to-vdproj"

    @property
    def output_suffix(self) -> str:
        """Extension of files produced in this direction."""
        return XML_SUFFIX if self is Direction.VDPROJ_TO_XML else VDPROJ_SUFFIX


def detect_direction(path: Path) -> Direction:
    """Choose the conversion direction from a file extension.

    Raises
    ------
        ValueError: If the extension is neither .vdproj nor .xml.

    """
    suffix = path.suffix.strip().lower()
    if suffix == VDPROJ_SUFFIX:
        return Direction.VDPROJ_TO_XML
    if suffix == XML_SUFFIX:
        return Direction.XML_TO_VDPROJ
    raise ValueError(f"Unsupported file extension: {path.suffix!r}. Use .vdproj or .xml")


def vdproj_to_xml(
    lines: Iterable[str],
    output: TextIO,
    options: ConversionOptions | None = None,
) -> int:
    """Convert vdproj lines to an XML document.

    Returns
    -------
        Number of elements written.

    Raises
    ------
        ConversionError: If the input is malformed.

    """
    writer = XmlWriter(output, options)
    writer.write_all(parse_lines(lines))
    logger.debug("Wrote %d XML elements", writer.elements_written)
    return writer.elements_written


def xml_to_vdproj(
    stream: BinaryIO,
    output: TextIO,
    options: ConversionOptions | None = None,
) -> int:
    """Convert an XML document to vdproj text.

    Returns
    -------
        Number of lines written.

    Raises
    ------
        ConversionError: If the input is malformed.

    """
    writer = VdprojWriter(output, options)
    writer.write_all(read_xml_events(stream))
    logger.debug("Wrote %d vdproj lines", writer.lines_written)
    return writer.lines_written


def vdproj_to_xml_string(text: str, options: ConversionOptions | None = None) -> str:
    """Convert vdproj text to XML text."""
    output = io.StringIO()
    vdproj_to_xml(io.StringIO(text), output, options)
    return output.getvalue()


def xml_to_vdproj_string(text: str, options: ConversionOptions | None = None) -> str:
    """Convert XML text to vdproj text."""
    output = io.StringIO()
    xml_to_vdproj(io.BytesIO(text.encode("utf-8")), output, options)
    return output.getvalue()


def read_events(path: Path) -> Iterator[Event]:
    """Yield the canonical events of a .vdproj or .xml file."""
    direction = detect_direction(path)
    if direction is Direction.VDPROJ_TO_XML:
        with path.open("r", encoding=VDPROJ_INPUT_ENCODING) as f:
            yield from parse_lines(f)
    else:
        with path.open("rb") as f:
            yield from read_xml_events(f)


def _output_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        # New files get the mode open() would give them
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@contextmanager
def atomic_output(path: Path) -> Iterator[TextIO]:
    """Open a text file that only replaces `path` if the block succeeds.

    Data goes to a temporary file next to `path`; it is renamed over `path`
    on success and deleted on any exception. The result keeps the mode of
    the file it replaces, or gets the usual umask-based mode if it is new.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _output_mode(path)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with open(fd, "w", encoding="utf-8", newline="") as f:
            yield f
        os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


def convert_file(
    input_path: Path,
    output_path: Path | None = None,
    options: ConversionOptions | None = None,
) -> Path:
    """Convert a .vdproj file to .xml or an .xml file to .vdproj.

    Args:
    ----
        input_path: File to convert; its extension selects the direction.
        output_path: Target file. Defaults to the input path with the
            extension swapped.
        options: Conversion options.

    Returns:
    -------
        The path that was written.

    Raises:
    ------
        ConversionError: If the input is malformed (location includes the file).
        IoFailureError: If the input cannot be read or the output written.
        ValueError: If the input extension is not supported.

    """
    direction = detect_direction(input_path)
    if output_path is None:
        output_path = input_path.with_suffix(direction.output_suffix)

    logger.debug("Converting %s -> %s (%s)", input_path, output_path, direction.value)

    try:
        with atomic_output(output_path) as output:
            if direction is Direction.VDPROJ_TO_XML:
                with input_path.open("r", encoding=VDPROJ_INPUT_ENCODING) as f:
                    vdproj_to_xml(f, output, options)
            else:
                with input_path.open("rb") as f:
                    xml_to_vdproj(f, output, options)
    except ConversionError as e:
        raise e.at_path(input_path) from None
    except UnicodeDecodeError as e:
        raise IoFailureError(f"{input_path}: not valid UTF-8 ({e.reason})") from e
    except UnicodeEncodeError as e:
        raise IoFailureError(f"{output_path}: cannot be written as UTF-8 ({e.reason})") from e
    except OSError as e:
        raise IoFailureError(f"{e.strerror or e}: {e.filename or output_path}") from e

    return output_path
