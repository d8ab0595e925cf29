"""
Frontmatter Extraction Module

Orchestrates detection and parsing: finds the header block, hands it to
the adapter of the detected notation and separates it from the body.
The notation is decided once by the detector; a failing adapter is
never retried with another notation.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..exceptions import NotationParseError
from .adapters import JsonAdapter, NotationAdapter, TomlAdapter, YamlAdapter, adapter_for
from .detector import (
    JSON_DELIMITER,
    TOML_DELIMITER,
    YAML_DELIMITER,
    HeaderSpan,
    detect_frontmatter,
)
from .enums import Notation
from .values import MappingValue

logger = logging.getLogger(__name__)


@dataclass
class MetadataDocument:
    """Top-level metadata mapping plus the remaining body text."""
    metadata: MappingValue = field(default_factory=MappingValue)
    body: str = ""

    def __post_init__(self):
        if not isinstance(self.metadata, MappingValue):
            raise ValueError(f"metadata must be a MappingValue, got {type(self.metadata)}")
        if not isinstance(self.body, str):
            raise ValueError(f"body must be a string, got {type(self.body)}")


@dataclass
class ExtractionResult:
    """Result container for frontmatter extraction.

    Attributes:
        document: Extracted metadata and body
        notation: Notation of the header, or None without frontmatter
        span: Location of the header block, or None without frontmatter
        parse_time_ms: Time taken by detection and parsing in milliseconds
    """
    document: MetadataDocument
    notation: Optional[Notation] = None
    span: Optional[HeaderSpan] = None
    parse_time_ms: Optional[float] = None

    @property
    def has_frontmatter(self) -> bool:
        return self.notation is not None

    @property
    def metadata(self) -> MappingValue:
        return self.document.metadata

    @property
    def body(self) -> str:
        return self.document.body


@dataclass(frozen=True)
class NotationRegistration:
    """Pairs a delimiter style with the adapter that parses its header."""
    delimiter: object
    adapter: NotationAdapter

    @property
    def notation(self) -> Notation:
        return self.adapter.notation


def default_registrations() -> List[NotationRegistration]:
    """Registrations in detection priority order: YAML, TOML, JSON."""
    return [
        NotationRegistration(YAML_DELIMITER, YamlAdapter()),
        NotationRegistration(TOML_DELIMITER, TomlAdapter()),
        NotationRegistration(JSON_DELIMITER, JsonAdapter()),
    ]


class FrontmatterExtractor:
    """Extracts frontmatter metadata from raw document text.

    Registrations are checked in order; the first whose delimiter opens
    the document decides the notation.
    """

    def __init__(self, registrations: Optional[Sequence[NotationRegistration]] = None):
        self.registrations = list(registrations) if registrations is not None else default_registrations()
        self._adapters = {reg.notation: reg.adapter for reg in self.registrations}

    def extract(self, content: str) -> ExtractionResult:
        """Extract metadata and body from content.

        Args:
            content: Raw document text

        Returns:
            ExtractionResult; without frontmatter the metadata is empty and
            the body is the unchanged input

        Raises:
            UnterminatedHeaderError: If the header is never closed
            NotationParseError: If the header fails to parse in its notation
        """
        if not isinstance(content, str):
            raise ValueError("Content must be a string")

        start_time = time.time()

        span = detect_frontmatter(content, [reg.delimiter for reg in self.registrations])
        if span is None:
            return ExtractionResult(
                document=MetadataDocument(MappingValue(), content),
                parse_time_ms=(time.time() - start_time) * 1000,
            )

        adapter = self._adapters[span.notation]
        try:
            metadata = adapter.parse(span.header)
        except NotationParseError as e:
            logger.debug(f"{span.notation} header failed to parse: {e}")
            raise NotationParseError(
                e.notation,
                e.detail,
                line=e.line + span.line_offset if e.line is not None else None,
                column=e.column,
                content_preview=e.content_preview
            ) from e

        parse_time = (time.time() - start_time) * 1000
        logger.debug(f"Extracted {len(metadata)} {span.notation} fields in {parse_time:.2f}ms")

        return ExtractionResult(
            document=MetadataDocument(metadata, content[span.body_start:]),
            notation=span.notation,
            span=span,
            parse_time_ms=parse_time,
        )


def extract(content: str) -> ExtractionResult:
    """Extract frontmatter using the default notation registrations."""
    return FrontmatterExtractor().extract(content)


def compose_document(metadata: MappingValue, body: str, notation: Notation) -> str:
    """Render metadata as a frontmatter header in a notation, followed by body.

    Extracting the composed text yields the same metadata and body (for
    TOML, nulls are dropped since TOML cannot express them).
    """
    header = adapter_for(notation).dump(metadata)
    if notation is Notation.JSON:
        return header + body
    marker = YAML_DELIMITER.marker if notation is Notation.YAML else TOML_DELIMITER.marker
    if header and not header.endswith("\n"):
        header += "\n"
    return f"{marker}\n{header}{marker}\n{body}"
