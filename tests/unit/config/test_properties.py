"""Unit tests for the .properties reader."""

import pytest

from dbtck.config.properties import load_properties, parse_properties


class TestParseProperties:
    """Test parsing of .properties text."""

    def test_separators(self):
        """Keys may be separated from values by '=', ':' or whitespace."""
        entries = parse_properties("a=1\nb: 2\nc 3\nd = 4\n")

        assert entries == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_comments_and_blank_lines(self):
        """Comment and blank lines are ignored."""
        text = "# comment\n! also a comment\n\n   \nkey=value\n  # indented comment\n"

        assert parse_properties(text) == {"key": "value"}

    def test_continuation_lines(self):
        """A trailing backslash joins the next line, minus its indentation."""
        text = "url=jdbc:sqlite:\\\n    /tmp/db\nnext=1\n"

        entries = parse_properties(text)

        assert entries["url"] == "jdbc:sqlite:/tmp/db"
        assert entries["next"] == "1"

    def test_escaped_backslash_is_not_continuation(self):
        """An even number of trailing backslashes is an escaped backslash."""
        entries = parse_properties("path=C:\\\\\nother=x\n")

        assert entries == {"path": "C:\\", "other": "x"}

    def test_escapes(self):
        """Standard escapes and unicode escapes are decoded."""
        entries = parse_properties("a=tab\\there\nb=\\u00e9t\\u00e9\nc=new\\nline\n")

        assert entries["a"] == "tab\there"
        assert entries["b"] == "été"
        assert entries["c"] == "new\nline"

    def test_escaped_separator_in_key(self):
        """Escaped separators belong to the key."""
        entries = parse_properties("a\\=b=c\n")

        assert entries == {"a=b": "c"}

    def test_empty_value(self):
        """A key with no value maps to the empty string."""
        assert parse_properties("DBTCK_WRAPPER=\nalone\n") == {
            "DBTCK_WRAPPER": "",
            "alone": "",
        }

    def test_last_duplicate_wins(self):
        """A repeated key keeps its last value."""
        assert parse_properties("k=1\nk=2\n") == {"k": "2"}

    def test_value_keeps_inner_separators(self):
        """Only the first separator splits key from value."""
        entries = parse_properties("DBTCK_CONNECT_URL=postgresql://u:p@h:5432/db?x=1\n")

        assert entries["DBTCK_CONNECT_URL"] == "postgresql://u:p@h:5432/db?x=1"


class TestLoadProperties:
    """Test reading .properties files."""

    def test_load_file(self, temp_dir):
        """Files are read as UTF-8."""
        path = temp_dir / "test.properties"
        path.write_text("name=café\n", encoding="utf-8")

        assert load_properties(path) == {"name": "café"}

    def test_missing_file_raises(self, temp_dir):
        """Missing files raise OSError; callers decide to skip them."""
        with pytest.raises(OSError):
            load_properties(temp_dir / "absent.properties")
