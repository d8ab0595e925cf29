"""Tests for metadata post-processing."""

import pytest

from metadata_gen.core.processing import generate_slug, process_metadata, standardize_date
from metadata_gen.core.values import NumberValue, StringValue, from_native
from metadata_gen.exceptions import DateParseError, MissingFieldError


class TestStandardizeDate:

    @pytest.mark.parametrize("value,expected", [
        ("2023-05-20T15:30:00Z", "2023-05-20"),
        ("2023-05-20T15:30:00+02:00", "2023-05-20"),
        ("2023-05-20", "2023-05-20"),
        ("20/05/2023", "2023-05-20"),
    ])
    def test_accepted_formats(self, value, expected):
        assert standardize_date(value) == expected

    @pytest.mark.parametrize("value,message", [
        ("", "empty"),
        ("   ", "empty"),
        ("invalid", "too short"),
        ("20/5/2023x", "DD/MM/YYYY"),
        ("not a date at all", "Unrecognized"),
        ("32/01/2023", "Unrecognized"),
    ])
    def test_rejected(self, value, message):
        with pytest.raises(DateParseError, match=message):
            standardize_date(value)

    def test_short_slash_date_rejected(self):
        """Test DD/MM/YY is not accepted."""
        with pytest.raises(DateParseError):
            standardize_date("20/05/23")


class TestGenerateSlug:

    @pytest.mark.parametrize("title,expected", [
        ("Hello World", "hello-world"),
        ("Test 123", "test-123"),
        ("  Spaces  ", "--spaces--"),
    ])
    def test_slug(self, title, expected):
        assert generate_slug(title) == expected


class TestProcessMetadata:

    def test_process(self):
        metadata = from_native({"title": "Hello World", "date": "20/05/2023"})

        processed = process_metadata(metadata)

        assert processed["date"] == StringValue("2023-05-20")
        assert processed["slug"] == StringValue("hello-world")
        assert metadata["date"] == StringValue("20/05/2023")
        assert "slug" not in metadata

    def test_existing_slug_kept(self):
        metadata = from_native({"title": "Hello", "date": "2023-01-01", "slug": "custom"})
        assert process_metadata(metadata)["slug"] == StringValue("custom")

    def test_missing_required_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            process_metadata(from_native({"title": "Only title"}))

        assert exc_info.value.field == "date"
        assert str(exc_info.value) == "Missing required metadata field: date"

    def test_custom_required_fields(self):
        processed = process_metadata(from_native({"name": "x"}), required=("name",))
        assert processed["name"] == StringValue("x")
        assert "slug" not in processed

    def test_invalid_date(self):
        with pytest.raises(DateParseError):
            process_metadata(from_native({"title": "T", "date": "invalid"}))

    def test_non_text_date(self):
        with pytest.raises(DateParseError):
            process_metadata(from_native({"title": "T", "date": {"y": 2023}}))

    def test_other_fields_untouched(self):
        processed = process_metadata(from_native({"title": "T", "date": "2023-01-01", "n": 2}))
        assert processed["n"] == NumberValue(2)
