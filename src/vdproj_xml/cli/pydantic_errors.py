"""Translate Pydantic errors in config files to user-friendly messages."""

from __future__ import annotations

from pydantic_core import ErrorDetails

ERROR_TRANSLATIONS: dict[str, str] = {
    "extra_forbidden": "Unknown setting",
    "bool_type": "Must be true or false",
    "bool_parsing": "Must be true or false",
    "string_type": "Must be a string",
    "string_too_short": "Must not be empty",
    "string_pattern_mismatch": "May only contain spaces and tabs",
    "literal_error": "Must be one of the allowed values",
    "enum": "Must be one of the allowed values",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Translate a Pydantic error to a user-friendly message."""
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type in ("literal_error", "enum"):
        return f"Must be one of: {ctx.get('expected', 'unknown')}"

    return ERROR_TRANSLATIONS.get(error_type, error["msg"])


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format Pydantic location tuple to readable path."""
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(part))

    return "".join(parts)


def get_suggestion_for_error(error: ErrorDetails) -> str | None:
    """Get a suggestion for how to fix the error."""
    suggestions: dict[str, str] = {
        "extra_forbidden": (
            "Known settings are pretty_print, indent, newline and vdproj_layout"
        ),
        "literal_error": 'Use "\\r\\n" or "\\n" (double-quoted in YAML)',
        "enum": "Use nested or visual-studio",
    }

    return suggestions.get(error["type"])
