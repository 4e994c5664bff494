"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from vdproj_xml.models import ConversionOptions, VdprojLayout

from tests.fixtures.sample_vdproj import SETUP_VDPROJ


@pytest.fixture
def unix_options() -> ConversionOptions:
    """Options with LF line endings and the default nested layout."""
    return ConversionOptions(newline="\n")


@pytest.fixture
def visual_studio_options() -> ConversionOptions:
    """Options that reproduce Visual Studio's own layout (LF line endings)."""
    return ConversionOptions(newline="\n", vdproj_layout=VdprojLayout.VISUAL_STUDIO)


@pytest.fixture
def setup_vdproj_file(tmp_path: Path) -> Path:
    """Write the sample installer project to a temporary .vdproj file."""
    path = tmp_path / "Setup.vdproj"
    path.write_text(SETUP_VDPROJ, encoding="utf-8")
    return path
