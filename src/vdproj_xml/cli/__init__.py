"""CLI support modules for vdproj-xml.

The Typer application itself lives in `vdproj_xml.cli_main`.
"""

from vdproj_xml.cli.error_formatter import ErrorFormatter
from vdproj_xml.cli.exception_handler import handle_exceptions
from vdproj_xml.cli.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)

__all__ = [
    "ErrorFormatter",
    "handle_exceptions",
    "format_pydantic_location",
    "get_suggestion_for_error",
    "translate_pydantic_error",
]
