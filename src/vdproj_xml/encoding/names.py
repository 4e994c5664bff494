"""Mapping between raw vdproj keys and XML local names.

vdproj keys are arbitrary text ("{GUID}", "Entry 1", "1stItem"). Characters
that may not appear in an XML name are written as `_xHHHH_` (or
`_xHHHHHHHH_` outside the Basic Multilingual Plane), the convention used by
.NET's `XmlConvert.EncodeLocalName`, so XML produced by other tools for the
same files decodes identically.

Only ASCII and Latin-1 letters (plus digits, `-`, `.`, `_` after the first
position) are kept as they are; they are name characters in every edition
of XML 1.0 and for every parser. Everything else is escaped.
"""

from __future__ import annotations

import re

from vdproj_xml.errors import InvalidXmlNameError
from vdproj_xml.ir.events import NO_KEY_ENTRY

_ESCAPE_SEQUENCE = re.compile(r"_x([0-9A-Fa-f]{8}|[0-9A-Fa-f]{4})_")

_NAME_START = re.compile(r"[A-Za-z_À-ÖØ-öø-ÿ]")
_NAME_CHAR = re.compile(r"[A-Za-z0-9._\-·À-ÖØ-öø-ÿ]")
_SURROGATES = re.compile("[\ud800-\udfff]")

# Longest escape sequence is "_x" + 8 hex digits + "_".
_LOOKAHEAD = 10


def _is_literal(char: str, first: bool) -> bool:
    pattern = _NAME_START if first else _NAME_CHAR
    return pattern.match(char) is not None


def _escape_char(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        return f"_x{code:08X}_"
    return f"_x{code:04X}_"


def encode_name(name: str) -> str:
    """Encode a raw vdproj key as a valid XML local name.

    Args:
    ----
        name: Raw key as it appears in the vdproj file (after unescaping).

    Returns:
    -------
        XML local name that `decode_name` maps back to `name`.

    Raises:
    ------
        InvalidXmlNameError: If the name is empty.

    Examples:
    --------
        >>> encode_name("ProductName")
        'ProductName'
        >>> encode_name("{EDC2488A}")
        '_x007B_EDC2488A_x007D_'
        >>> encode_name("1st Entry")
        '_x0031_st_x0020_Entry'

    """
    if not name:
        raise InvalidXmlNameError(
            "An empty key has no XML element name",
            suggestion='Give the element a non-empty key, e.g. "Entry"',
        )

    pieces: list[str] = []
    for index, char in enumerate(name):
        if char == "_" or _is_literal(char, first=index == 0):
            pieces.append(char)
        else:
            pieces.append(_escape_char(char))

    # The reserved keyless tag is never used for a real key.
    if name == NO_KEY_ENTRY:
        pieces[0] = _escape_char(name[0])

    # Right to left, so each underscore sees the final text that follows it.
    for index in range(len(pieces) - 1, -1, -1):
        if name[index] == "_":
            following = "".join(pieces[index + 1 : index + 1 + _LOOKAHEAD])
            if _ESCAPE_SEQUENCE.match("_" + following):
                pieces[index] = "_x005F_"

    return "".join(pieces)


def _decode_sequence(match: re.Match[str]) -> str:
    code = int(match.group(1), 16)
    if code > 0x10FFFF:
        return match.group(0)
    return chr(code)


def decode_name(name: str) -> str:
    """Decode an XML local name produced by `encode_name`.

    Examples
    --------
        >>> decode_name("_x007B_EDC2488A_x007D_")
        '{EDC2488A}'
        >>> decode_name("We_x0022_ird")
        'We"ird'

    """
    return _ESCAPE_SEQUENCE.sub(_decode_sequence, name)


def has_ambiguous_escape(name: str) -> bool:
    """Check an XML name for escape sequences `encode_name` would never write.

    `_x0041_` could be an escaped "A" or the literal text "_x0041_" from a
    writer that does not escape underscores. Escapes of characters that are
    always kept literally are therefore rejected; escapes of underscores and
    of characters that need escaping are fine, as is any literal character
    the XML parser accepted. Escapes of surrogate code points are rejected
    too; a lone surrogate cannot be written as UTF-8.
    """
    for match in _ESCAPE_SEQUENCE.finditer(name):
        decoded = _decode_sequence(match)
        if len(decoded) != 1 or decoded == "_":
            continue
        if _SURROGATES.match(decoded):
            return True
        first = match.start() == 0
        if first and decoded == NO_KEY_ENTRY[0] and decode_name(name) == NO_KEY_ENTRY:
            continue
        if _is_literal(decoded, first):
            return True
    return False
