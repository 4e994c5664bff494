"""Readers and writers for the vdproj and XML forms.

Primary Functions:
    vdproj_to_xml / xml_to_vdproj: Stream-to-stream conversion
    vdproj_to_xml_string / xml_to_vdproj_string: In-memory conversion
    convert_file: File conversion with extension dispatch

Example:
-------
    >>> from pathlib import Path
    >>> from vdproj_xml.converters import convert_file
    >>> from vdproj_xml.models import ConversionOptions
    >>>
    >>> convert_file(Path("Setup.vdproj"), options=ConversionOptions(pretty_print=True))
    PosixPath('Setup.xml')

"""

from vdproj_xml.converters.pipeline import (
    Direction,
    convert_file,
    detect_direction,
    read_events,
    vdproj_to_xml,
    vdproj_to_xml_string,
    xml_to_vdproj,
    xml_to_vdproj_string,
)
from vdproj_xml.converters.vdproj_reader import ParserState, finish, parse_line, parse_lines
from vdproj_xml.converters.vdproj_writer import VdprojWriter
from vdproj_xml.converters.xml_reader import read_xml_events
from vdproj_xml.converters.xml_writer import XmlWriter

__all__ = [
    "Direction",
    "ParserState",
    "VdprojWriter",
    "XmlWriter",
    "convert_file",
    "detect_direction",
    "finish",
    "parse_line",
    "parse_lines",
    "read_events",
    "read_xml_events",
    "vdproj_to_xml",
    "vdproj_to_xml_string",
    "xml_to_vdproj",
    "xml_to_vdproj_string",
]
