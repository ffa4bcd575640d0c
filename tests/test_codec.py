"""Tests for PermissionCodec decoding and canonical encoding."""

from __future__ import annotations

import logging

import pytest

from posixperm.codec import DEFAULT_CODEC, PermissionCodec, as_text, encode
from posixperm.exceptions import ParseError
from posixperm.grammars import FULL, SYMBOLIC

# ---------------------------------------------------------------------------
# Octal
# ---------------------------------------------------------------------------


class TestOctal:
    def test_implicit_range(self):
        for value in range(0o100, 0o1000):
            assert DEFAULT_CODEC.decode(f"{value:o}") == value

    def test_explicit_zero_prefix_range(self):
        for value in range(0o000, 0o1000):
            assert DEFAULT_CODEC.decode(f"0{value:03o}") == value

    def test_explicit_0o_prefix_range(self):
        for value in range(0o000, 0o1000):
            assert DEFAULT_CODEC.decode(f"0o{value:03o}") == value

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("678", id="implicit-8"),
            pytest.param("999", id="implicit-9"),
            pytest.param("0678", id="explicit-8"),
            pytest.param("0o678", id="explicit-0o-8"),
            pytest.param("0999", id="explicit-9"),
            pytest.param("0o999", id="explicit-0o-9"),
        ],
    )
    def test_digit_out_of_range(self, text):
        with pytest.raises(ParseError):
            DEFAULT_CODEC.decode(text)

    @pytest.mark.parametrize("text", ["47777777777", "047777777777", "0o47777777777"])
    def test_overflow(self, text):
        with pytest.raises(ParseError, match="overflows"):
            DEFAULT_CODEC.decode(text)


# ---------------------------------------------------------------------------
# Symbolic
# ---------------------------------------------------------------------------


class TestSymbolic:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            pytest.param("a=rwx", 0o777, id="assign-all"),
            pytest.param("a=rwx o-w", 0o775, id="remove-other-write"),
            pytest.param("a=rwxo-w", 0o775, id="no-separator"),
            pytest.param("u=x g=w o=r", 0o124, id="per-actor"),
            pytest.param("u+w u+r u+w", 0o600, id="cumulative-add"),
            pytest.param("u=ru+wu-r", 0o200, id="assign-add-remove"),
            pytest.param("u+wu=ru+wu-r", 0o200, id="assign-resets"),
            pytest.param("a=rwx o-r a-w o-x o+r", 0o554, id="left-to-right"),
        ],
    )
    def test_valid(self, text, expected):
        assert DEFAULT_CODEC.decode(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("a=rwz", id="unknown-permission"),
            pytest.param("u=rw o+x m+w", id="unknown-actor"),
            pytest.param("a=rwx o!x", id="bang-operator"),
            pytest.param("a=rwx g~x", id="tilde-operator"),
            pytest.param("a=rwx  o-w", id="double-space"),
            pytest.param("ugoa=r", id="actor-too-long"),
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(ParseError, match="unrecognized permission syntax"):
            DEFAULT_CODEC.decode(text)

    def test_never_sets_mode_bits(self):
        assert DEFAULT_CODEC.decode("a=rwx a+rwx") & ~0o777 == 0


# ---------------------------------------------------------------------------
# Basic forms
# ---------------------------------------------------------------------------


class TestBasicSingle:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("rwx", 0o777), ("r-x", 0o555), ("r--", 0o444), ("---", 0o000)],
    )
    def test_valid(self, text, expected):
        assert DEFAULT_CODEC.decode(text) == expected

    @pytest.mark.parametrize("text", ["rxw", "-r-", "rWx"])
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            DEFAULT_CODEC.decode(text)


class TestBasicTriple:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("rwxrwxrwx", 0o777),
            ("rwxr-x---", 0o750),
            ("r---wx-w-", 0o432),
            ("---------", 0o000),
        ],
    )
    def test_valid(self, text, expected):
        assert DEFAULT_CODEC.decode(text) == expected

    @pytest.mark.parametrize("text", ["rwxrmxrwx", "wrxwrxwrx", "rw?rwxrwx"])
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            DEFAULT_CODEC.decode(text)


class TestFull:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("-rwxrwxrwx", 0o777),
            ("-rwxr-x---", 0o750),
            ("-r---wx-w-", 0o432),
            ("----------", 0o000),
        ],
    )
    def test_valid(self, text, expected):
        assert DEFAULT_CODEC.decode(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["-rwxrmxrwx", "-wrxwrxwrx", "-rw?rwxrwx", "--rwxrwxrwx", "d-rwxrwxrwx", "xrwxrwxrwx"],
    )
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            DEFAULT_CODEC.decode(text)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncode:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            pytest.param(0, "----------", id="zero"),
            pytest.param(0o644, "-rw-r--r--", id="file"),
            pytest.param((1 << 31) | 0o755, "drwxr-xr-x", id="dir"),
            pytest.param((1 << 23) | (1 << 22) | 0o755, "ugrwxr-xr-x", id="setuid-setgid"),
            pytest.param((1 << 31) | (1 << 20) | 0o777, "dtrwxrwxrwx", id="sticky-dir"),
            pytest.param(0xFFF8_0000, "dalTLDpSugct?---------", id="all-mode-bits"),
        ],
    )
    def test_values(self, value, expected):
        assert encode(value) == expected

    def test_unnamed_bits_are_not_rendered(self):
        assert encode(0o7000 | 0o644) == "-rw-r--r--"

    @pytest.mark.parametrize(
        "text",
        ["drwxrwxrwx", "ugrwxr-xr-x", "-rwxr-x---", "-r---wx-w-", "Lrwxrwxrwx", "Dcrw-rw----"],
    )
    def test_canonical_text_is_fixed_point(self, text):
        assert DEFAULT_CODEC.encode(DEFAULT_CODEC.decode(text)) == text

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("644", "-rw-r--r--"),
            ("0o750", "-rwxr-x---"),
            ("a=rx u+w", "-rwxr-xr-x"),
            ("r-x", "-r-xr-xr-x"),
            ("rwxr-x---", "-rwxr-x---"),
            ("gurwxr-xr-x", "ugrwxr-xr-x"),
        ],
    )
    def test_non_canonical_text_formats_full(self, text, expected):
        assert DEFAULT_CODEC.encode(DEFAULT_CODEC.decode(text)) == expected


# ---------------------------------------------------------------------------
# Configuration, input types and logging
# ---------------------------------------------------------------------------


class TestPermissionCodec:
    def test_default_grammars(self):
        assert PermissionCodec() == DEFAULT_CODEC

    def test_restricted_codec_rejects_octal(self):
        codec = PermissionCodec(grammars=(SYMBOLIC, FULL))
        assert codec.decode("a=r") == 0o444
        with pytest.raises(ParseError):
            codec.decode("644")

    def test_classify(self):
        assert DEFAULT_CODEC.classify("drwxr-xr-x") is FULL
        assert DEFAULT_CODEC.classify("nope") is None

    def test_decode_bytes(self):
        assert DEFAULT_CODEC.decode(b"0644") == 0o644
        assert DEFAULT_CODEC.decode(bytearray(b"rwx")) == 0o777

    def test_non_ascii_bytes(self):
        with pytest.raises(ParseError, match="not ASCII"):
            DEFAULT_CODEC.decode("rwxé".encode())

    def test_non_ascii_text(self):
        with pytest.raises(ParseError):
            DEFAULT_CODEC.decode("٤٤٤")

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="expected str or bytes"):
            as_text(644)  # type: ignore[arg-type]

    def test_error_carries_input(self):
        with pytest.raises(ParseError) as exc_info:
            DEFAULT_CODEC.decode("bogus")
        assert exc_info.value.text == "bogus"
        assert exc_info.value.reason == "unrecognized permission syntax"
        assert str(exc_info.value) == "unrecognized permission syntax: 'bogus'"

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            DEFAULT_CODEC.decode("bogus")

    def test_logs_matched_grammar(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="posixperm.codec"):
            DEFAULT_CODEC.decode("0644")
        assert "explicit octal" in caplog.text

    def test_logs_unmatched_input(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="posixperm.codec"), pytest.raises(ParseError):
            DEFAULT_CODEC.decode("bogus")
        assert "No permission grammar matched" in caplog.text
