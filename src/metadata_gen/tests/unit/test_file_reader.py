"""Tests for reading documents from disk."""

import pytest

from metadata_gen.core.enums import Notation
from metadata_gen.core.pipeline import PipelineOptions
from metadata_gen.core.validator import ValidationRule
from metadata_gen.exceptions import DocumentReadError, ValidationFailedError
from metadata_gen.utils.file_reader import (
    async_extract_metadata_from_file,
    async_read_document,
    extract_metadata_from_file,
    read_document,
)


class TestReadDocument:

    def test_read(self, write_document):
        path = write_document("hello")
        assert read_document(path) == "hello"

    def test_missing_file(self, temp_directory):
        with pytest.raises(DocumentReadError):
            read_document(temp_directory / "missing.md")

    def test_invalid_utf8(self, temp_directory):
        path = temp_directory / "binary.md"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(DocumentReadError, match="UTF-8"):
            read_document(path)

    def test_extract_from_file(self, write_document, yaml_document):
        bundle = extract_metadata_from_file(write_document(yaml_document))
        assert bundle.notation is Notation.YAML


class TestAsyncFileReader:
    """Tests for the executor-backed async reader."""

    @pytest.mark.asyncio
    async def test_async_read(self, write_document):
        path = write_document("async content")
        assert await async_read_document(path) == "async content"

    @pytest.mark.asyncio
    async def test_async_extract(self, write_document, toml_document):
        bundle = await async_extract_metadata_from_file(write_document(toml_document))

        assert bundle.notation is Notation.TOML
        assert bundle.keywords == ["toml", "config"]
        assert bundle.body == "TOML body.\n"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   \n\t\n"])
    async def test_empty_file_gives_empty_bundle(self, write_document, content):
        bundle = await async_extract_metadata_from_file(write_document(content))

        assert bundle.has_frontmatter is False
        assert len(bundle.metadata) == 0
        assert bundle.keywords == []
        assert bundle.meta_tags == []

    @pytest.mark.asyncio
    async def test_empty_file_skips_validation(self, write_document):
        """Test an empty file is not validated even when rules are configured."""
        options = PipelineOptions(rules=[ValidationRule("title")])
        bundle = await async_extract_metadata_from_file(write_document(""), options)
        assert bundle.notation is None

    @pytest.mark.asyncio
    async def test_async_validation_failure(self, write_document):
        options = PipelineOptions(rules=[ValidationRule("title")])

        with pytest.raises(ValidationFailedError):
            await async_extract_metadata_from_file(write_document("---\nother: 1\n---\n"), options)

    @pytest.mark.asyncio
    async def test_async_missing_file(self, temp_directory):
        with pytest.raises(DocumentReadError):
            await async_read_document(temp_directory / "missing.md")
