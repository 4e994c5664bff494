"""Tests for config file loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError
from vdproj_xml.models import LoaderError, VdprojLayout, load_config_file, load_options


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        """Should load a mapping."""
        config = tmp_path / "config.yaml"
        config.write_text("pretty_print: true\nindent: '    '\n")
        assert load_config_file(config) == {"pretty_print": True, "indent": "    "}

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Should raise LoaderError for a missing file."""
        with pytest.raises(LoaderError, match="not found"):
            load_config_file(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should treat an empty file as no settings."""
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert load_config_file(config) == {}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Should raise LoaderError for invalid YAML."""
        config = tmp_path / "bad.yaml"
        config.write_text("not: valid: yaml: [")
        with pytest.raises(LoaderError, match="YAML parsing error"):
            load_config_file(config)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Should raise LoaderError when the root is not a mapping."""
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(LoaderError, match="Expected a mapping"):
            load_config_file(config)

    def test_error_includes_path(self, tmp_path: Path) -> None:
        """Should mention the file in the message."""
        config = tmp_path / "list.yaml"
        config.write_text("- a\n")
        with pytest.raises(LoaderError) as exc_info:
            load_config_file(config)
        assert exc_info.value.path == config
        assert str(config) in str(exc_info.value)


class TestLoadOptions:
    """Tests for load_options()."""

    def test_full_config(self, tmp_path: Path) -> None:
        """Should validate every setting."""
        config = tmp_path / "config.yaml"
        config.write_text(
            dedent(
                """\
                pretty_print: true
                indent: "\\t"
                newline: "\\n"
                vdproj_layout: visual-studio
                """
            )
        )
        options = load_options(config)
        assert options.pretty_print is True
        assert options.indent == "\t"
        assert options.newline == "\n"
        assert options.vdproj_layout is VdprojLayout.VISUAL_STUDIO

    def test_fields_set(self, tmp_path: Path) -> None:
        """Should remember which settings the file contained."""
        config = tmp_path / "config.yaml"
        config.write_text("pretty_print: false\n")
        assert load_options(config).model_fields_set == {"pretty_print"}

    def test_unknown_setting(self, tmp_path: Path) -> None:
        """Should reject unknown settings."""
        config = tmp_path / "config.yaml"
        config.write_text("colour: red\n")
        with pytest.raises(ValidationError):
            load_options(config)
