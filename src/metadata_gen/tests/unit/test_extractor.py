"""Tests for the extraction orchestrator."""

import pytest

from metadata_gen.core.enums import Notation
from metadata_gen.core.extractor import (
    ExtractionResult,
    FrontmatterExtractor,
    MetadataDocument,
    NotationRegistration,
    compose_document,
    default_registrations,
    extract,
)
from metadata_gen.core.adapters import YamlAdapter
from metadata_gen.core.detector import YAML_DELIMITER
from metadata_gen.core.values import MappingValue, StringValue, from_native
from metadata_gen.exceptions import NotationParseError, UnterminatedHeaderError


class TestFrontmatterExtractor:
    """Tests for extracting metadata and body together."""

    def setup_method(self):
        self.extractor = FrontmatterExtractor()

    def test_no_frontmatter_keeps_body(self):
        """Test documents without a header return the input unchanged."""
        text = "# Just markdown\n\n---\nnot a header\n"
        result = self.extractor.extract(text)

        assert isinstance(result, ExtractionResult)
        assert result.has_frontmatter is False
        assert result.notation is None
        assert result.metadata == MappingValue()
        assert result.body == text

    def test_yaml_document(self, yaml_document):
        result = self.extractor.extract(yaml_document)

        assert result.has_frontmatter is True
        assert result.notation is Notation.YAML
        assert result.metadata["title"] == StringValue("My Post")
        assert result.metadata.lookup("author.name") == StringValue("Jane Doe")
        assert result.body.startswith("# Heading")
        assert result.parse_time_ms is not None

    def test_toml_document(self, toml_document):
        result = self.extractor.extract(toml_document)

        assert result.notation is Notation.TOML
        assert result.metadata["title"] == StringValue("TOML Post")
        assert result.body == "TOML body.\n"

    def test_json_document(self, json_document):
        result = self.extractor.extract(json_document)

        assert result.notation is Notation.JSON
        assert result.metadata["rating"].value == 4.5
        assert result.body == "JSON body.\n"

    def test_parse_error_reports_document_line(self):
        """Test parse errors point at the line within the whole document."""
        text = "---\ntitle: ok\nbad: [unclosed\n---\nbody"

        with pytest.raises(NotationParseError) as exc_info:
            self.extractor.extract(text)

        error = exc_info.value
        assert error.notation is Notation.YAML
        assert error.line >= 3
        assert isinstance(error.__cause__, NotationParseError)

    def test_failing_notation_is_not_retried(self):
        """Test a TOML header that fails does not fall back to another notation."""
        with pytest.raises(NotationParseError) as exc_info:
            self.extractor.extract("+++\nnot toml at all\n+++\n")

        assert exc_info.value.notation is Notation.TOML

    def test_unterminated_header(self):
        with pytest.raises(UnterminatedHeaderError):
            self.extractor.extract("---\ntitle: x\nno closing line\n")

    def test_custom_registrations(self):
        """Test an extractor limited to YAML ignores TOML headers."""
        extractor = FrontmatterExtractor([NotationRegistration(YAML_DELIMITER, YamlAdapter())])
        text = "+++\ntitle = 'x'\n+++\n"

        result = extractor.extract(text)
        assert result.has_frontmatter is False
        assert result.body == text

    def test_default_registration_order(self):
        notations = [reg.notation for reg in default_registrations()]
        assert notations == [Notation.YAML, Notation.TOML, Notation.JSON]

    def test_non_string_content_rejected(self):
        with pytest.raises(ValueError):
            self.extractor.extract(b"---\n---\n")

    def test_module_level_extract(self, yaml_document):
        assert extract(yaml_document).notation is Notation.YAML


class TestMetadataDocument:

    def test_metadata_must_be_mapping_value(self):
        with pytest.raises(ValueError):
            MetadataDocument({"title": "x"}, "")


class TestComposeDocument:
    """Tests for rendering documents in another notation."""

    @pytest.mark.parametrize("notation", list(Notation))
    def test_compose_then_extract(self, notation):
        """Test composed documents extract back to the same metadata and body."""
        metadata = from_native({"title": "T", "tags": ["a", "b"], "nested": {"k": "v"}})
        text = compose_document(metadata, "Body text\n", notation)

        result = extract(text)
        assert result.notation is notation
        assert result.metadata == metadata
        assert result.body == "Body text\n"

    def test_compose_empty_yaml(self):
        assert compose_document(MappingValue(), "b", Notation.YAML) == "---\n---\nb"
