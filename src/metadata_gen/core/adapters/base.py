"""
Base class for notation adapters.

An adapter turns the raw header text of one notation into the value
model and back. Parser-specific exceptions are converted into
NotationParseError here so nothing above this layer depends on them.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ...exceptions import NotationParseError
from ..enums import Notation
from ..values import MappingValue, ValueConversionError, mapping_from_native

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200


class NotationAdapter(ABC):
    """Translator between one notation and the value model."""

    notation: Notation

    def parse(self, header: str) -> MappingValue:
        """Parse header text into a mapping.

        Args:
            header: Header text with delimiters stripped

        Returns:
            MappingValue; an empty header yields an empty mapping

        Raises:
            NotationParseError: On the first syntax error, or when the
                header does not hold a mapping at its top level
        """
        start_time = time.time()

        if not header.strip():
            return MappingValue()

        native = self.load(header)
        if native is None:
            return MappingValue()

        try:
            mapping = mapping_from_native(native)
        except ValueConversionError as e:
            raise NotationParseError(
                self.notation,
                str(e),
                content_preview=header[:PREVIEW_LENGTH]
            ) from e

        parse_time = (time.time() - start_time) * 1000
        logger.debug(f"Parsed {self.notation} header with {len(mapping)} keys in {parse_time:.2f}ms")
        return mapping

    @abstractmethod
    def load(self, header: str) -> Any:
        """Run the notation parser and return its generic tree.

        Raises:
            NotationParseError: If the underlying parser rejects the text
        """

    @abstractmethod
    def dump(self, mapping: MappingValue) -> str:
        """Serialize a mapping as header text in this notation."""
