"""
Tests for the properties file codec.
"""

import pytest

from droidsign.core.errors import PropertiesError
from droidsign.core.properties import (
    dump_properties,
    load_properties,
    parse_properties,
    write_properties,
)


class TestParseProperties:
    """java.util.Properties line format."""

    def test_comments_and_blank_lines(self):
        text = "# comment\n! also a comment\n\n   \nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    def test_separators(self):
        """=, : and whitespace all separate key from value."""
        text = "a=1\nb: 2\nc 3\nd\t=\t4\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_leading_whitespace_ignored(self):
        assert parse_properties("    keyAlias = upload\n") == {"keyAlias": "upload"}

    def test_trailing_whitespace_kept(self):
        """Trailing whitespace belongs to the value."""
        assert parse_properties("keyAlias=upload  \n") == {"keyAlias": "upload  "}

    def test_key_without_value(self):
        assert parse_properties("storeFile=\nkeyAlias\n") == {"storeFile": "", "keyAlias": ""}

    def test_only_first_separator_splits(self):
        assert parse_properties("storePassword=a=b:c\n") == {"storePassword": "a=b:c"}

    def test_escaped_separator_in_key(self):
        assert parse_properties("my\\=key=value\n") == {"my=key": "value"}

    def test_line_continuation(self):
        """A trailing backslash joins the next line, minus its indentation."""
        text = "storePassword=abc\\\n    def\nkeyAlias=upload\n"
        assert parse_properties(text) == {"storePassword": "abcdef", "keyAlias": "upload"}

    def test_even_backslashes_do_not_continue(self):
        text = "storeFile=keys\\\\\nkeyAlias=upload\n"
        assert parse_properties(text) == {"storeFile": "keys\\", "keyAlias": "upload"}

    def test_comment_char_inside_continuation_is_data(self):
        text = "storePassword=abc\\\n#def\n"
        assert parse_properties(text) == {"storePassword": "abc#def"}

    def test_escapes(self):
        text = "a=tab\\there\nb=line\\nbreak\nc=\\u00e9t\\u00e9\n"
        assert parse_properties(text) == {"a": "tab\there", "b": "line\nbreak", "c": "été"}

    def test_unknown_escape_drops_backslash(self):
        """Windows paths need doubled backslashes, as with Gradle."""
        assert parse_properties("storeFile=C:\\keys\\app.jks\n") == {"storeFile": "C:keysapp.jks"}
        assert parse_properties("storeFile=C:\\\\keys\\\\upload.jks\n") == {
            "storeFile": "C:\\keys\\upload.jks"
        }

    def test_surrogate_pair_escape(self):
        assert parse_properties("keyAlias=\\uD83D\\uDE00\n") == {"keyAlias": "\U0001F600"}

    def test_malformed_unicode_escape(self):
        with pytest.raises(PropertiesError):
            parse_properties("keyAlias=\\u12\n")

    def test_last_duplicate_wins(self):
        assert parse_properties("keyAlias=one\nkeyAlias=two\n") == {"keyAlias": "two"}

    def test_crlf_line_endings(self):
        text = "storeFile=release.keystore\r\nkeyAlias=upload\r\n"
        assert parse_properties(text) == {"storeFile": "release.keystore", "keyAlias": "upload"}


class TestPropertiesFiles:
    """Reading and writing files."""

    def test_load_reads_latin1(self, tmp_path):
        path = tmp_path / "key.properties"
        path.write_bytes(b"keyAlias=caf\xe9\n")

        assert load_properties(path) == {"keyAlias": "café"}

    def test_load_unreadable_path(self, tmp_path):
        with pytest.raises(PropertiesError):
            load_properties(tmp_path)

    def test_dump_escapes_special_characters(self):
        text = dump_properties({"storePassword": " p@ss=word#1"})
        assert text == "storePassword=\\ p@ss\\=word\\#1\n"

    def test_dump_comments(self):
        text = dump_properties({"keyAlias": "upload"}, comments="Release signing")
        assert text == "# Release signing\nkeyAlias=upload\n"

    def test_written_file_reads_back(self, tmp_path):
        """Values with separators, leading spaces and non-Latin-1 text survive a write."""
        values = {
            "storePassword": " p@ss=word#1",
            "keyAlias": "ключ",
            "storeFile": "C:\\keys\\upload.jks",
        }
        path = write_properties(tmp_path / "key.properties", values, comments="Release signing")

        assert load_properties(path) == values
        assert "\\u043A" in path.read_text(encoding="ascii")


class TestLineBreaks:
    """Only \\n, \\r and \\r\\n end a line."""

    def test_form_feed_inside_value(self):
        assert parse_properties("keyPassword=a\x0cb\n") == {"keyPassword": "a\x0cb"}

    @pytest.mark.parametrize("char", ["\x0b", "\x1c", "\x1d", "\x1e", "\x85", " "])
    def test_unicode_line_separators_stay_in_value(self, char):
        text = f"storePassword=p{char}ss\nkeyAlias=upload\n"
        assert parse_properties(text) == {"storePassword": f"p{char}ss", "keyAlias": "upload"}

    def test_mixed_line_endings_in_file(self, tmp_path):
        path = tmp_path / "key.properties"
        path.write_bytes(b"a=1\r\nb=2\rc=3\n")

        assert load_properties(path) == {"a": "1", "b": "2", "c": "3"}

    def test_utf8_password_bytes_read_as_latin1(self, tmp_path):
        """UTF-8 Å is C3 85; both bytes stay in the value, as Gradle reads them."""
        path = tmp_path / "key.properties"
        path.write_bytes(b"storePassword=p" + "Å".encode("utf-8") + b"ss\nkeyAlias=upload\n")

        assert load_properties(path) == {"storePassword": "p\xc3\x85ss", "keyAlias": "upload"}

    def test_high_latin1_bytes(self, tmp_path):
        path = tmp_path / "key.properties"
        path.write_bytes(b"keyAlias=\x80\x9f\xa0\xff\n")

        assert load_properties(path) == {"keyAlias": "\x80\x9f\xa0\xff"}
