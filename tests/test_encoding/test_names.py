"""Tests for the XML name codec."""

import xml.parsers.expat

import pytest
from vdproj_xml.encoding import decode_name, encode_name
from vdproj_xml.encoding.names import has_ambiguous_escape
from vdproj_xml.errors import InvalidXmlNameError
from vdproj_xml.ir import NO_KEY_ENTRY

from tests.fixtures.sample_vdproj import TRICKY_NAMES


def is_well_formed_tag(name: str) -> bool:
    """Check that expat accepts `name` as an element name."""
    parser = xml.parsers.expat.ParserCreate()
    try:
        parser.Parse(f"<{name}/>", True)
    except xml.parsers.expat.ExpatError:
        return False
    return True


class TestEncodeName:
    """Tests for encode_name()."""

    def test_valid_name_unchanged(self) -> None:
        """Should keep names that are already valid XML names."""
        assert encode_name("ProductName") == "ProductName"
        assert encode_name("a-b.c_d") == "a-b.c_d"

    def test_braces(self) -> None:
        """Should escape braces of GUID keys."""
        assert encode_name("{EDC2488A}") == "_x007B_EDC2488A_x007D_"

    def test_leading_digit(self) -> None:
        """Should escape a digit in first position only."""
        assert encode_name("1st2nd") == "_x0031_st2nd"

    def test_leading_dash_and_dot(self) -> None:
        """Should escape characters that may not start a name."""
        assert encode_name("-a") == "_x002D_a"
        assert encode_name(".a") == "_x002E_a"

    def test_space_and_quote(self) -> None:
        """Should escape spaces and quotes."""
        assert encode_name("Entry 1") == "Entry_x0020_1"
        assert encode_name('We"ird') == "We_x0022_ird"

    def test_colon(self) -> None:
        """Should escape colons so the result is a local name."""
        assert encode_name("a:b") == "a_x003A_b"

    def test_supplementary_character(self) -> None:
        """Should use eight hex digits outside the BMP."""
        assert encode_name("\U0001f600") == "_x0001F600_"

    def test_non_ascii_letters_kept(self) -> None:
        """Should keep letters outside ASCII."""
        assert encode_name("Größe") == "Größe"

    def test_underscore_kept(self) -> None:
        """Should keep underscores that do not look like an escape."""
        assert encode_name("_private_name") == "_private_name"
        assert encode_name("_x") == "_x"

    def test_underscore_that_looks_like_escape(self) -> None:
        """Should escape an underscore that starts an escape-like sequence."""
        assert encode_name("_x0041_") == "_x005F_x0041_"

    def test_underscore_followed_by_encoded_character(self) -> None:
        """Should escape an underscore when the following escape completes a sequence."""
        assert encode_name("_xABCD ") == "_x005F_xABCD_x0020_"

    def test_reserved_keyless_name(self) -> None:
        """Should never produce the keyless entry tag for a real key."""
        assert encode_name(NO_KEY_ENTRY) == "_x004E_oKeyEntry"
        assert encode_name("NoKeyEntryX") == "NoKeyEntryX"

    def test_empty_name(self) -> None:
        """Should reject the empty name."""
        with pytest.raises(InvalidXmlNameError):
            encode_name("")


class TestDecodeName:
    """Tests for decode_name()."""

    def test_plain(self) -> None:
        """Should leave names without escapes alone."""
        assert decode_name("ProductName") == "ProductName"

    def test_escapes(self) -> None:
        """Should decode four and eight digit escapes."""
        assert decode_name("_x007B_G_x007D_") == "{G}"
        assert decode_name("_x0001F600_") == "\U0001f600"

    def test_lowercase_hex(self) -> None:
        """Should accept lowercase hex digits."""
        assert decode_name("a_x002f_b") == "a/b"

    def test_out_of_range_kept(self) -> None:
        """Should keep sequences that are not a code point."""
        assert decode_name("_x00110000_") == "_x00110000_"

    def test_quote_scenario(self) -> None:
        """Should decode an encoded quote back to the raw key."""
        assert decode_name(encode_name('We"ird')) == 'We"ird'


@pytest.mark.parametrize("name", TRICKY_NAMES)
def test_round_trip(name: str) -> None:
    """Should decode every encoded name to the original."""
    assert decode_name(encode_name(name)) == name


@pytest.mark.parametrize("name", TRICKY_NAMES)
def test_encoded_name_is_valid_xml(name: str) -> None:
    """Should always produce a well-formed element name."""
    assert is_well_formed_tag(encode_name(name))


@pytest.mark.parametrize("char", [chr(c) for c in range(1, 0x250)])
def test_every_single_character_round_trips(char: str) -> None:
    """Should handle every control, ASCII and Latin character."""
    encoded = encode_name(char)
    assert decode_name(encoded) == char
    assert is_well_formed_tag(encoded)


class TestHasAmbiguousEscape:
    """Tests for has_ambiguous_escape()."""

    def test_canonical_names(self) -> None:
        """Should accept names produced by encode_name()."""
        for name in TRICKY_NAMES:
            assert not has_ambiguous_escape(encode_name(name))

    def test_surrogate_escape(self) -> None:
        """Should flag escapes of lone surrogates."""
        assert has_ambiguous_escape("A_xD800_")
        assert has_ambiguous_escape("_xDFFF_")

    def test_escaped_plain_letter(self) -> None:
        """Should reject an escape of a character that is always literal."""
        assert has_ambiguous_escape("_x0041_BC")
        assert has_ambiguous_escape("a_x0031_")

    def test_escaped_leading_digit(self) -> None:
        """Should accept an escaped digit in first position only."""
        assert not has_ambiguous_escape("_x0031_st")

    def test_literal_non_latin_letters(self) -> None:
        """Should accept letters other writers leave unescaped."""
        assert not has_ambiguous_escape("Имя")

    def test_escaped_underscore(self) -> None:
        """Should accept escaped underscores even where not required."""
        assert not has_ambiguous_escape("_x005F_abc")


def test_non_latin_letters_escaped() -> None:
    """Should escape letters outside Latin-1."""
    encoded = encode_name("Имя")
    assert encoded == "_x0418__x043C__x044F_"
    assert decode_name(encoded) == "Имя"
