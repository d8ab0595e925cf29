"""
Keyword derivation.

Builds an ordered, de-duplicated keyword list from one or more metadata
fields. A field may hold a delimited string ("rust, metadata; web") or a
sequence of values. Missing or unusable fields contribute nothing.
"""

import re
from typing import Iterable, Iterator, List, Sequence

from .enums import ValueKind
from .values import MappingValue, SequenceValue, StringValue, Value

DEFAULT_KEYWORD_FIELDS = ("keywords",)

_DELIMITER_RE = re.compile(r"[,;]")


def _flatten(value: Value) -> Iterator[str]:
    if isinstance(value, SequenceValue):
        for item in value:
            yield from _flatten(item)
    elif value.is_scalar and value.kind is not ValueKind.NULL:
        yield value.to_text()


def _field_keywords(value: Value) -> Iterable[str]:
    if isinstance(value, StringValue):
        return _DELIMITER_RE.split(value.value)
    if isinstance(value, SequenceValue):
        return _flatten(value)
    return ()


def derive_keywords(
    metadata: MappingValue,
    field_names: Sequence[str] = DEFAULT_KEYWORD_FIELDS
) -> List[str]:
    """Collect unique keywords from the given fields.

    Strings are split on commas and semicolons; sequences contribute their
    scalar elements. Every keyword is trimmed, empty ones are dropped and
    the first occurrence of each exact string is kept.

    Args:
        metadata: Extracted metadata
        field_names: Fields to read, in order

    Returns:
        Ordered list of unique keywords
    """
    keywords: List[str] = []
    seen = set()

    for name in field_names:
        value = metadata.lookup(name)
        if value is None:
            continue
        for raw in _field_keywords(value):
            keyword = raw.strip()
            if keyword and keyword not in seen:
                seen.add(keyword)
                keywords.append(keyword)

    return keywords
