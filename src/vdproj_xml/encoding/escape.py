"""Backslash escaping of quoted vdproj strings.

Only two characters are escaped: `\\` becomes `\\\\` and `"` becomes `\\"`.
Line breaks are passed through unchanged, which is why a value containing
one cannot be written to the line-oriented format.
"""

from __future__ import annotations

import re

_ESCAPED_PAIR = re.compile(r'\\(["\\])')


def escape(value: str) -> str:
    """Escape a raw string for use between double quotes.

    Examples
    --------
        >>> escape('We"ird')
        'We\\\\"ird'
        >>> escape("C:\\\\Temp")
        'C:\\\\\\\\Temp'

    """
    return value.replace("\\", "\\\\").replace('"', '\\"')


def unescape(value: str) -> str:
    """Reverse `escape`.

    Scans left to right so every backslash pairs with the character after
    it: `\\"` becomes `"`, `\\\\` becomes `\\`. Any other backslash pair is
    kept as written.
    """
    return _ESCAPED_PAIR.sub(r"\1", value)
