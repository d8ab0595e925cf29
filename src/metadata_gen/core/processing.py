"""
Metadata post-processing.

Normalizes extracted metadata for publishing: dates are standardized to
``YYYY-MM-DD``, required fields are enforced and a URL slug is derived
from the title when none is given.
"""

import datetime
import logging
from typing import Sequence

from ..exceptions import DateParseError, MissingFieldError
from .values import MappingValue, StringValue

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_FIELDS = ("title", "date")

_FALLBACK_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


def _parse_iso(value: str) -> datetime.date:
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.datetime.fromisoformat(value).date()
    except ValueError:
        return datetime.date.fromisoformat(value)


def standardize_date(value: str) -> str:
    """Convert a date string into ``YYYY-MM-DD``.

    Accepts ISO-8601 dates and datetimes (including a ``Z`` suffix) and
    European ``DD/MM/YYYY`` dates.

    Raises:
        DateParseError: If the value is empty, shorter than eight
            characters, a malformed ``DD/MM/YYYY`` date or unparseable
    """
    if not value.strip():
        raise DateParseError("Date string is empty.", value)
    if len(value) < 8:
        raise DateParseError("Date string is too short.", value)

    text = value
    if "/" in text and len(text) == 10:
        parts = text.split("/")
        if len(parts) != 3 or [len(p) for p in parts] != [2, 2, 4]:
            raise DateParseError("Invalid DD/MM/YYYY date format.", value)
        text = f"{parts[2]}-{parts[1]}-{parts[0]}"

    try:
        parsed = _parse_iso(text)
    except ValueError:
        parsed = None
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.datetime.strptime(text, fmt).date()
                break
            except ValueError:
                continue
        if parsed is None:
            raise DateParseError(f"Unrecognized date '{value}'", value)

    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def generate_slug(title: str) -> str:
    """Lowercase the title and replace spaces with hyphens."""
    return title.lower().replace(" ", "-")


def process_metadata(
    metadata: MappingValue,
    required: Sequence[str] = DEFAULT_REQUIRED_FIELDS
) -> MappingValue:
    """Return a processed copy of metadata.

    Args:
        metadata: Extracted metadata; never modified
        required: Fields that must be present

    Returns:
        New mapping with a standardized ``date`` and a ``slug``

    Raises:
        DateParseError: If ``date`` cannot be standardized
        MissingFieldError: For the first required field that is absent
    """
    entries = dict(metadata.entries)

    date = entries.get("date")
    if date is not None:
        text = date.to_text()
        if text is None:
            raise DateParseError(f"Expected a date string, got {date.kind}")
        entries["date"] = StringValue(standardize_date(text))

    for name in required:
        if name not in entries:
            raise MissingFieldError(name)

    title = entries.get("title")
    if "slug" not in entries and title is not None and title.to_text():
        entries["slug"] = StringValue(generate_slug(title.to_text()))

    logger.debug(f"Processed metadata with {len(entries)} fields")
    return MappingValue(entries)
