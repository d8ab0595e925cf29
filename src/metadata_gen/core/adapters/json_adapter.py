"""JSON notation adapter backed by the standard json module."""

import json
from typing import Any

from ...exceptions import NotationParseError
from ..enums import Notation
from ..values import MappingValue
from .base import NotationAdapter, PREVIEW_LENGTH


class JsonAdapter(NotationAdapter):
    """Adapter for a JSON object at the top of a document.

    Duplicate keys keep their first position and take the last value.
    NaN and Infinity literals are accepted as numbers.
    """

    notation = Notation.JSON

    def load(self, header: str) -> Any:
        try:
            return json.loads(header)
        except json.JSONDecodeError as e:
            raise NotationParseError(
                self.notation,
                f"Invalid JSON: {e.msg}",
                line=e.lineno,
                column=e.colno,
                content_preview=header[:PREVIEW_LENGTH]
            ) from e

    def dump(self, mapping: MappingValue) -> str:
        return json.dumps(mapping.to_native(), ensure_ascii=False, indent=2) + "\n"
