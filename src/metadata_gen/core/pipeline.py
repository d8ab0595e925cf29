"""
Metadata Pipeline Module

Runs the full chain for one document: extract frontmatter, validate it
when rules are configured, derive keywords and render meta tags. The
pipeline never reads files or configuration itself; callers pass the raw
text and a PipelineOptions value.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from ..exceptions import ValidationFailedError
from .enums import AttributeKind, Notation
from .extractor import FrontmatterExtractor
from .keywords import DEFAULT_KEYWORD_FIELDS, derive_keywords
from .metatags import (
    DEFAULT_SEPARATOR,
    MetaTagSpec,
    field_map_from_config,
    generate_meta_tags,
    render_meta_tag_block,
)
from .validator import MetadataValidator, ValidationRule, rules_from_config
from .values import MappingValue

logger = logging.getLogger(__name__)

DEFAULT_FIELD_MAP = (
    MetaTagSpec("description", "description"),
    MetaTagSpec("keywords", "keywords"),
    MetaTagSpec("author", "author"),
    MetaTagSpec("title", "og:title", AttributeKind.PROPERTY),
    MetaTagSpec("description", "og:description", AttributeKind.PROPERTY),
)


def _lookup(config: Mapping[str, Any], key: str, default: Any = None) -> Any:
    current: Any = config
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


@dataclass
class PipelineOptions:
    """Settings for one pipeline run.

    Attributes:
        rules: Validation rules; no validation when empty
        keyword_fields: Fields read for keywords, in order
        field_map: Ordered meta tag specifications
        separator: Joiner for sequence values in tag content
    """
    rules: List[ValidationRule] = field(default_factory=list)
    keyword_fields: Sequence[str] = DEFAULT_KEYWORD_FIELDS
    field_map: Sequence[MetaTagSpec] = DEFAULT_FIELD_MAP
    separator: str = DEFAULT_SEPARATOR

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "PipelineOptions":
        """Build options from a loaded configuration dictionary.

        Reads ``validation``, ``keywords.fields``, ``metatags.fields`` and
        ``metatags.separator``; absent keys keep their defaults.
        """
        options = cls()

        validation = _lookup(config, "validation")
        if validation:
            options.rules = rules_from_config(validation)

        keyword_fields = _lookup(config, "keywords.fields")
        if keyword_fields:
            options.keyword_fields = tuple(keyword_fields)

        metatag_fields = _lookup(config, "metatags.fields")
        if metatag_fields:
            options.field_map = tuple(field_map_from_config(metatag_fields))

        separator = _lookup(config, "metatags.separator")
        if separator is not None:
            options.separator = separator

        return options


@dataclass
class MetadataBundle:
    """Everything derived from one document."""
    metadata: MappingValue = field(default_factory=MappingValue)
    body: str = ""
    notation: Optional[Notation] = None
    keywords: List[str] = field(default_factory=list)
    meta_tags: List[str] = field(default_factory=list)

    @property
    def has_frontmatter(self) -> bool:
        return self.notation is not None

    @property
    def meta_tag_block(self) -> str:
        return render_meta_tag_block(self.meta_tags)

    def to_dict(self) -> dict:
        return {
            "notation": str(self.notation) if self.notation else None,
            "metadata": self.metadata.to_native(),
            "keywords": list(self.keywords),
            "meta_tags": list(self.meta_tags),
        }


def extract_and_prepare_metadata(
    raw_text: str,
    options: Optional[PipelineOptions] = None,
    extractor: Optional[FrontmatterExtractor] = None
) -> MetadataBundle:
    """Extract, validate and derive keywords and meta tags for a document.

    Args:
        raw_text: Full document text
        options: Pipeline settings (defaults when None)
        extractor: Extractor to use (default registrations when None)

    Returns:
        MetadataBundle for the document

    Raises:
        UnterminatedHeaderError: If the header is never closed
        NotationParseError: If the header fails to parse
        ValidationFailedError: If configured rules report violations
    """
    options = options or PipelineOptions()
    extractor = extractor or FrontmatterExtractor()

    result = extractor.extract(raw_text)
    metadata = result.metadata

    if options.rules:
        validation = MetadataValidator(options.rules).validate(metadata)
        if not validation.valid:
            logger.debug(f"Document failed validation: {len(validation.violations)} violation(s)")
            raise ValidationFailedError(validation.violations)

    bundle = MetadataBundle(
        metadata=metadata,
        body=result.body,
        notation=result.notation,
        keywords=derive_keywords(metadata, options.keyword_fields),
        meta_tags=generate_meta_tags(metadata, options.field_map, options.separator),
    )
    logger.debug(
        f"Prepared bundle: {len(bundle.keywords)} keywords, {len(bundle.meta_tags)} meta tags"
    )
    return bundle
