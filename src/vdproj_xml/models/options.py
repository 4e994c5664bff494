"""Conversion options."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# Environment variable honoured by the command line, as in the original tool.
INDENT_ENVIRONMENT_VARIABLE = "VDPROJECT2XML_INDENT"


class VdprojLayout(str, Enum):
    """Indentation style of written vdproj files."""

    NESTED = "nested"
    """Every line is indented four spaces per enclosing block."""

    VISUAL_STUDIO = "visual-studio"
    """Value lines sit at the column of their parent's braces, as Visual Studio writes them."""


class ConversionOptions(BaseModel):
    """Settings shared by both conversion directions.

    Example:
    -------
        ```yaml
        pretty_print: true
        indent: "  "
        newline: "\\r\\n"
        vdproj_layout: visual-studio
        ```

    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pretty_print: Annotated[
        bool,
        Field(description="Write XML with one element per line and indentation"),
    ] = False
    indent: Annotated[
        str,
        Field(
            min_length=1,
            pattern=r"^[ \t]+$",
            description="Indentation unit for pretty-printed XML",
        ),
    ] = "  "
    newline: Annotated[
        Literal["\r\n", "\n"],
        Field(description="Line terminator for vdproj output and pretty-printed XML"),
    ] = "\r\n"
    vdproj_layout: Annotated[
        VdprojLayout,
        Field(description="Indentation style of written vdproj files"),
    ] = VdprojLayout.NESTED


def parse_bool(text: str | None) -> bool:
    """Parse 'true'/'false' (any case, surrounding whitespace ignored).

    Anything else, including a missing value, is False.
    """
    if text is None:
        return False
    return text.strip().lower() == "true"


def options_from_environment(
    environ: Mapping[str, str] | None = None,
    base: ConversionOptions | None = None,
) -> ConversionOptions:
    """Apply `VDPROJECT2XML_INDENT` to a set of options.

    Args:
    ----
        environ: Environment mapping (defaults to `os.environ`).
        base: Options to start from (defaults to `ConversionOptions()`).

    Returns:
    -------
        Options with `pretty_print` taken from the environment if it is set.

    """
    environ = os.environ if environ is None else environ
    base = base or ConversionOptions()
    if INDENT_ENVIRONMENT_VARIABLE not in environ:
        return base
    return base.model_copy(
        update={"pretty_print": parse_bool(environ[INDENT_ENVIRONMENT_VARIABLE])}
    )
