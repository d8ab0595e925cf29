"""
Meta Tag Generation Module

Renders HTML ``<meta>`` tags from extracted metadata and reads them back
from HTML documents.

Generation is driven by an ordered field map: each MetaTagSpec names the
metadata key to read and the attribute the tag is published under. Output
order follows the map, never the metadata, so repeated runs produce
byte-identical markup. Content and attribute values are always escaped.
"""

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .enums import AttributeKind, ValueKind
from .escape import escape_html
from .values import MappingValue, SequenceValue, Value

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ", "


@dataclass(frozen=True)
class MetaTagSpec:
    """Maps a metadata key to a published meta tag.

    Attributes:
        key: Metadata field to read (dotted paths allowed)
        attribute: Value of the naming attribute, e.g. "og:title"
        attribute_kind: Which attribute names the tag
    """
    key: str
    attribute: str
    attribute_kind: AttributeKind = AttributeKind.NAME

    def __post_init__(self):
        if not self.key:
            raise ValueError("Meta tag key cannot be empty")
        if not self.attribute:
            raise ValueError(f"Meta tag attribute for '{self.key}' cannot be empty")


def render_meta_tag(
    attribute: str,
    content: str,
    attribute_kind: AttributeKind = AttributeKind.NAME
) -> str:
    """Render one escaped meta tag."""
    return (
        f'<meta {attribute_kind.value}="{escape_html(attribute)}" '
        f'content="{escape_html(content)}" />'
    )


def render_meta_tag_block(tags: Iterable[str]) -> str:
    """Join rendered tags into a newline-separated block."""
    return "\n".join(tags)


def stringify_for_tag(value: Value, separator: str = DEFAULT_SEPARATOR) -> Optional[str]:
    """Convert a value into tag content.

    Sequences join their scalar elements with the separator; nested
    sequences are flattened. Mappings and nulls have no tag content.
    """
    if value.kind in (ValueKind.NULL, ValueKind.MAPPING):
        return None
    if isinstance(value, SequenceValue):
        parts = []
        for item in value:
            text = stringify_for_tag(item, separator)
            if text is not None:
                parts.append(text)
        return separator.join(parts)
    return value.to_text()


def generate_meta_tags(
    metadata: MappingValue,
    field_map: Sequence[MetaTagSpec],
    separator: str = DEFAULT_SEPARATOR
) -> List[str]:
    """Render meta tags for every mapped field present in the metadata.

    Args:
        metadata: Extracted metadata
        field_map: Ordered tag specifications
        separator: Joiner for sequence values

    Returns:
        Rendered tags in field map order; absent keys are skipped
    """
    tags = []
    for spec in field_map:
        value = metadata.lookup(spec.key)
        if value is None:
            continue
        content = stringify_for_tag(value, separator)
        if content is None:
            continue
        tags.append(render_meta_tag(spec.attribute, content, spec.attribute_kind))

    logger.debug(f"Generated {len(tags)} meta tags from {len(field_map)} mapped fields")
    return tags


def field_map_from_config(items: Iterable[Any]) -> List[MetaTagSpec]:
    """Build a field map from configuration entries.

    Each entry is a mapping with ``key`` and optional ``attribute``
    (defaults to the key) and ``kind`` (``name``, ``property`` or
    ``http-equiv``; defaults to ``name``).

    Raises:
        ValueError: If an entry has no key or an unknown kind
    """
    field_map = []
    for item in items:
        if isinstance(item, str):
            field_map.append(MetaTagSpec(item, item))
            continue

        key = item.get("key")
        if not key:
            raise ValueError(f"Meta tag entry is missing 'key': {item}")
        kind_name = item.get("kind", AttributeKind.NAME.value)
        try:
            kind = AttributeKind(kind_name)
        except ValueError as e:
            raise ValueError(f"Unknown meta tag kind for '{key}': {kind_name}") from e
        field_map.append(MetaTagSpec(key, item.get("attribute") or key, kind))
    return field_map


APPLE_TAGS = (
    "apple-mobile-web-app-capable",
    "apple-mobile-web-app-status-bar-style",
    "apple-mobile-web-app-title",
)
PRIMARY_TAGS = ("author", "description", "keywords", "viewport")
OG_TAGS = ("og:title", "og:description", "og:image", "og:url", "og:type")
MS_TAGS = ("msapplication-TileColor", "msapplication-TileImage")
TWITTER_TAGS = (
    "twitter:card",
    "twitter:site",
    "twitter:title",
    "twitter:description",
    "twitter:image",
)

_GROUP_PREFIXES = (
    ("apple-", "apple"),
    ("msapplication-", "ms"),
    ("og:", "og"),
    ("twitter:", "twitter"),
)


def _group_map(names: Sequence[str], kind: AttributeKind = AttributeKind.NAME) -> List[MetaTagSpec]:
    return [MetaTagSpec(name, name, kind) for name in names]


@dataclass
class MetaTagGroups:
    """Rendered meta tags bucketed by platform.

    Each attribute holds the tags of one group in insertion order.
    """
    apple: List[str] = field(default_factory=list)
    primary: List[str] = field(default_factory=list)
    og: List[str] = field(default_factory=list)
    ms: List[str] = field(default_factory=list)
    twitter: List[str] = field(default_factory=list)

    @staticmethod
    def group_for(name: str) -> str:
        """Name of the group a tag belongs to, judged by its prefix."""
        for prefix, group in _GROUP_PREFIXES:
            if name.startswith(prefix):
                return group
        return "primary"

    def add_custom_tag(self, name: str, content: str) -> None:
        """Render a tag and append it to the group matching its prefix.

        Open Graph tags are published with the ``property`` attribute.
        """
        group = self.group_for(name)
        kind = AttributeKind.PROPERTY if group == "og" else AttributeKind.NAME
        getattr(self, group).append(render_meta_tag(name, content, kind))

    def groups(self) -> List[Tuple[str, List[str]]]:
        return [
            ("apple", self.apple),
            ("primary", self.primary),
            ("og", self.og),
            ("ms", self.ms),
            ("twitter", self.twitter),
        ]

    def all_tags(self) -> List[str]:
        return [tag for _, tags in self.groups() for tag in tags]

    def __str__(self) -> str:
        return "\n".join(
            render_meta_tag_block(tags) for _, tags in self.groups() if tags
        )


def generate_metatag_groups(
    metadata: MappingValue,
    separator: str = DEFAULT_SEPARATOR
) -> MetaTagGroups:
    """Render the standard platform tag groups from metadata.

    Each group reads metadata keys named after its tags, e.g. an
    ``og:title`` field produces ``<meta property="og:title" ...>``.
    """
    return MetaTagGroups(
        apple=generate_meta_tags(metadata, _group_map(APPLE_TAGS), separator),
        primary=generate_meta_tags(metadata, _group_map(PRIMARY_TAGS), separator),
        og=generate_meta_tags(metadata, _group_map(OG_TAGS, AttributeKind.PROPERTY), separator),
        ms=generate_meta_tags(metadata, _group_map(MS_TAGS), separator),
        twitter=generate_meta_tags(metadata, _group_map(TWITTER_TAGS), separator),
    )


@dataclass(frozen=True)
class MetaTag:
    """A meta tag read from HTML."""
    name: str
    content: str
    attribute_kind: AttributeKind = AttributeKind.NAME


class _MetaTagParser(HTMLParser):

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.tags: List[MetaTag] = []

    def handle_starttag(self, tag, attrs):
        if tag != "meta":
            return
        values = dict(attrs)
        content = values.get("content")
        if content is None:
            return
        for kind in (AttributeKind.NAME, AttributeKind.PROPERTY, AttributeKind.HTTP_EQUIV):
            name = values.get(kind.value)
            if name is not None:
                self.tags.append(MetaTag(name, content, kind))
                return

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)


def extract_meta_tags(html_content: str) -> List[MetaTag]:
    """Read every named meta tag from an HTML document.

    A tag is named by its ``name``, ``property`` or ``http-equiv``
    attribute (first present wins) and must carry ``content``. Entity
    references in attribute values are decoded.

    Args:
        html_content: HTML markup, complete document or fragment

    Returns:
        Meta tags in document order
    """
    parser = _MetaTagParser()
    parser.feed(html_content)
    parser.close()
    logger.debug(f"Found {len(parser.tags)} meta tags in HTML")
    return parser.tags


def meta_tags_to_dict(meta_tags: Iterable[MetaTag]) -> Dict[str, str]:
    """Map tag names to contents; later tags override earlier ones."""
    return {tag.name: tag.content for tag in meta_tags}
