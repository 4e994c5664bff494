"""Conversion options and config file loading."""

from vdproj_xml.models.loader import LoaderError, load_config_file, load_options
from vdproj_xml.models.options import (
    INDENT_ENVIRONMENT_VARIABLE,
    ConversionOptions,
    VdprojLayout,
    options_from_environment,
    parse_bool,
)

__all__ = [
    "INDENT_ENVIRONMENT_VARIABLE",
    "ConversionOptions",
    "LoaderError",
    "VdprojLayout",
    "load_config_file",
    "load_options",
    "options_from_environment",
    "parse_bool",
]
