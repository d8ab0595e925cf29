"""Tests for the YAML, TOML and JSON notation adapters."""

import math

import pytest

from metadata_gen.core.adapters import JsonAdapter, TomlAdapter, YamlAdapter, adapter_for
from metadata_gen.core.enums import Notation
from metadata_gen.core.values import (
    MappingValue,
    NumberValue,
    SequenceValue,
    StringValue,
    from_native,
)
from metadata_gen.exceptions import NotationParseError

SAMPLE = {
    "title": "Round trip: \"quoted\" & <tagged>",
    "count": 3,
    "ratio": 0.25,
    "published": True,
    "tags": ["a", "b", 1],
    "author": {"name": "Jane", "links": {"home": "https://example.com"}},
    "date": "2024-01-15",
    "multiline": "line one\nline two",
}


class TestYamlAdapter:
    """Tests for YAML parsing."""

    def setup_method(self):
        self.adapter = YamlAdapter()

    def test_parse_basic(self):
        result = self.adapter.parse("title: Hello\ntags: [a, b]\n")
        assert result["title"] == StringValue("Hello")
        assert result["tags"] == SequenceValue([StringValue("a"), StringValue("b")])

    def test_empty_header(self):
        """Test blank and comment-only headers yield empty mappings."""
        assert self.adapter.parse("") == MappingValue()
        assert self.adapter.parse("# just a comment\n") == MappingValue()

    def test_anchors_and_merge_keys(self):
        """Test aliases resolve to copies and merge keys apply."""
        header = "base: &base\n  a: 1\nchild:\n  <<: *base\n  b: 2\n"
        result = self.adapter.parse(header)
        assert result.lookup("child.a") == NumberValue(1)
        assert result.lookup("child.b") == NumberValue(2)

    def test_dates_become_strings(self):
        result = self.adapter.parse("date: 2024-01-15\n")
        assert result["date"] == StringValue("2024-01-15")

    def test_syntax_error_has_position(self):
        """Test PyYAML errors are normalized with line and column."""
        with pytest.raises(NotationParseError) as exc_info:
            self.adapter.parse("title: ok\nbad: [unclosed\n")

        error = exc_info.value
        assert error.notation is Notation.YAML
        assert error.line is not None
        assert error.column is not None
        assert "Parse failed in notation yaml" in str(error)

    def test_top_level_list_rejected(self):
        with pytest.raises(NotationParseError, match="mapping"):
            self.adapter.parse("- a\n- b\n")

    def test_custom_tags_rejected(self):
        with pytest.raises(NotationParseError):
            self.adapter.parse("value: !custom thing\n")

    def test_colliding_keys_rejected(self):
        """Test a number key and its quoted spelling cannot overwrite each other."""
        with pytest.raises(NotationParseError, match="Duplicate mapping key '1'"):
            self.adapter.parse('1: a\n"1": b\n')


class TestTomlAdapter:
    """Tests for TOML parsing."""

    def setup_method(self):
        self.adapter = TomlAdapter()

    def test_parse_tables(self):
        result = self.adapter.parse('title = "T"\n[author]\nname = "Jane"\n')
        assert result.lookup("author.name") == StringValue("Jane")

    def test_datetime_becomes_iso_string(self):
        result = self.adapter.parse("published = 2024-02-01T10:30:00Z\n")
        assert result["published"].value.startswith("2024-02-01T10:30:00")

    def test_syntax_error_has_position(self):
        with pytest.raises(NotationParseError) as exc_info:
            self.adapter.parse('title = "ok"\ntitle = "duplicate"\n')

        error = exc_info.value
        assert error.notation is Notation.TOML
        assert error.line == 2

    def test_dump_omits_nulls(self):
        """Test TOML output drops values TOML cannot express."""
        mapping = from_native({"a": 1, "b": None, "c": [1, None]})
        result = self.adapter.parse(self.adapter.dump(mapping))
        assert result == from_native({"a": 1, "c": [1]})

    def test_dump_quotes_unusual_keys(self):
        mapping = from_native({"og:title": "x", "plain_key": "y"})
        dumped = self.adapter.dump(mapping)
        assert '"og:title" = "x"' in dumped
        assert 'plain_key = "y"' in dumped


class TestJsonAdapter:
    """Tests for JSON parsing."""

    def setup_method(self):
        self.adapter = JsonAdapter()

    def test_duplicate_keys_last_value_wins(self):
        result = self.adapter.parse('{"a": 1, "b": 2, "a": 3}')
        assert result.keys() == ["a", "b"]
        assert result["a"] == NumberValue(3)

    def test_nan_and_infinity(self):
        result = self.adapter.parse('{"x": NaN, "y": Infinity}')
        assert math.isnan(result["x"].value)
        assert result["y"].value == math.inf

    def test_syntax_error_has_position(self):
        with pytest.raises(NotationParseError) as exc_info:
            self.adapter.parse('{\n  "a": 1,\n}')

        assert exc_info.value.line == 3
        assert exc_info.value.notation is Notation.JSON


class TestRoundTrip:
    """Tests for parse(dump(m)) == m in every notation."""

    @pytest.mark.parametrize("notation", list(Notation))
    def test_round_trip(self, notation):
        adapter = adapter_for(notation)
        mapping = from_native(SAMPLE)

        assert adapter.parse(adapter.dump(mapping)) == mapping

    @pytest.mark.parametrize("notation", list(Notation))
    def test_empty_mapping_round_trip(self, notation):
        adapter = adapter_for(notation)
        assert adapter.parse(adapter.dump(MappingValue())) == MappingValue()

    def test_adapter_for_unknown(self):
        with pytest.raises(ValueError):
            adapter_for("xml")
