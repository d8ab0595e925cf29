"""
Core modules for metadata-gen.

This package contains the extraction pipeline: frontmatter detection,
notation adapters, the value model, validation, keyword derivation and
meta tag generation.
"""

from .enums import AttributeKind, FieldKind, Notation, ValueKind, ViolationKind
from .values import (
    BooleanValue,
    MappingValue,
    NullValue,
    NumberValue,
    SequenceValue,
    StringValue,
    Value,
    ValueConversionError,
    from_native,
    mapping_from_native,
)
from .detector import HeaderSpan, detect_frontmatter
from .adapters import JsonAdapter, NotationAdapter, TomlAdapter, YamlAdapter, adapter_for
from .extractor import (
    ExtractionResult,
    FrontmatterExtractor,
    MetadataDocument,
    NotationRegistration,
    compose_document,
    default_registrations,
    extract,
)
from .validator import (
    MetadataValidator,
    ValidationResult,
    ValidationRule,
    Violation,
    rules_from_config,
    validate,
)
from .keywords import derive_keywords
from .metatags import (
    MetaTag,
    MetaTagGroups,
    MetaTagSpec,
    extract_meta_tags,
    field_map_from_config,
    generate_meta_tags,
    generate_metatag_groups,
    meta_tags_to_dict,
    render_meta_tag_block,
)
from .escape import escape_html, unescape_html
from .processing import generate_slug, process_metadata, standardize_date
from .pipeline import MetadataBundle, PipelineOptions, extract_and_prepare_metadata

__all__ = [
    # Enums
    "AttributeKind",
    "FieldKind",
    "Notation",
    "ValueKind",
    "ViolationKind",
    # Value model
    "Value",
    "NullValue",
    "BooleanValue",
    "NumberValue",
    "StringValue",
    "SequenceValue",
    "MappingValue",
    "ValueConversionError",
    "from_native",
    "mapping_from_native",
    # Detection and extraction
    "HeaderSpan",
    "detect_frontmatter",
    "NotationAdapter",
    "YamlAdapter",
    "TomlAdapter",
    "JsonAdapter",
    "adapter_for",
    "ExtractionResult",
    "FrontmatterExtractor",
    "MetadataDocument",
    "NotationRegistration",
    "compose_document",
    "default_registrations",
    "extract",
    # Validation
    "MetadataValidator",
    "ValidationResult",
    "ValidationRule",
    "Violation",
    "rules_from_config",
    "validate",
    # Derivation
    "derive_keywords",
    "MetaTag",
    "MetaTagGroups",
    "MetaTagSpec",
    "extract_meta_tags",
    "field_map_from_config",
    "generate_meta_tags",
    "generate_metatag_groups",
    "meta_tags_to_dict",
    "render_meta_tag_block",
    "escape_html",
    "unescape_html",
    # Processing
    "generate_slug",
    "process_metadata",
    "standardize_date",
    # Pipeline
    "MetadataBundle",
    "PipelineOptions",
    "extract_and_prepare_metadata",
]
