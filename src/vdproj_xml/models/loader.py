"""Config file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from vdproj_xml.models.options import ConversionOptions


class LoaderError(Exception):
    """Error during config file loading."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize LoaderError.

        Args:
        ----
            message: Error message describing what went wrong.
            path: Optional path to the file that caused the error.

        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file and return the raw dictionary.

    An empty file is an empty configuration.

    Raises
    ------
        LoaderError: If the file cannot be read or parsed.

    """
    if not path.is_file():
        raise LoaderError(f"Config file not found: {path}", path)

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e
    except OSError as e:
        raise LoaderError(f"File read error: {e}", path) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise LoaderError(
            f"Expected a mapping at root level, got {type(data).__name__}",
            path,
        )

    return data


def load_options(path: Path) -> ConversionOptions:
    """Load and validate conversion options from a YAML file.

    Raises
    ------
        LoaderError: If the file cannot be loaded.
        pydantic.ValidationError: If a setting is unknown or invalid.

    """
    return ConversionOptions.model_validate(load_config_file(path))
