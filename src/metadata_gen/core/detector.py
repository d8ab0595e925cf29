"""
Frontmatter Detection Module

Finds a delimited metadata header at the start of a document and tells
which notation it is written in. Detection only locates the header; it
never parses it.

Supported delimiters, checked in priority order:
- YAML: an opening ``---`` line closed by ``---`` or ``...``
- TOML: an opening ``+++`` line closed by ``+++``
- JSON: a top-level object starting on the first line, closed by its
  balanced ``}``
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..exceptions import UnterminatedHeaderError
from .enums import Notation

logger = logging.getLogger(__name__)

BOM = "\ufeff"


@dataclass(frozen=True)
class HeaderSpan:
    """Location of a detected header block.

    Attributes:
        notation: Notation selected for the header
        header: Header text with delimiters stripped (JSON keeps its braces)
        start: Offset of the opening delimiter
        end: Offset just past the closing delimiter
        body_start: Offset where the document body begins
        line_offset: Number of lines preceding the header text
    """
    notation: Notation
    header: str
    start: int
    end: int
    body_start: int
    line_offset: int = 0


def _content_start(text: str) -> int:
    return len(BOM) if text.startswith(BOM) else 0


def _read_line(text: str, offset: int) -> Tuple[str, int]:
    """Return the line starting at offset (without newline) and the next offset."""
    newline = text.find("\n", offset)
    if newline == -1:
        return text[offset:], len(text)
    return text[offset:newline], newline + 1


@dataclass(frozen=True)
class FenceDelimiter:
    """Header enclosed between marker lines such as ``---`` or ``+++``."""
    notation: Notation
    marker: str
    closers: Tuple[str, ...]

    def opens(self, text: str) -> bool:
        line, _ = _read_line(text, _content_start(text))
        return line.rstrip() == self.marker

    def locate(self, text: str) -> HeaderSpan:
        start = _content_start(text)
        _, header_start = _read_line(text, start)

        offset = header_start
        while offset < len(text):
            line, next_offset = _read_line(text, offset)
            if line.rstrip() in self.closers:
                return HeaderSpan(
                    notation=self.notation,
                    header=text[header_start:offset],
                    start=start,
                    end=offset + len(line.rstrip("\r")),
                    body_start=next_offset,
                    line_offset=1,
                )
            offset = next_offset

        raise UnterminatedHeaderError(self.notation, self.closers[0])


_JSON_OPENING = re.compile(r'[ \t]*\{\s*["}]')


@dataclass(frozen=True)
class BraceDelimiter:
    """Header that is a single JSON object at the top of the document."""
    notation: Notation = Notation.JSON

    def opens(self, text: str) -> bool:
        start = _content_start(text)
        line, _ = _read_line(text, start)
        if not line.lstrip().startswith("{"):
            return False
        # require an object shape so template tags such as "{% ... %}" are body text
        return _JSON_OPENING.match(text, start) is not None

    def locate(self, text: str) -> HeaderSpan:
        start = _content_start(text)
        brace = text.index("{", start)

        depth = 0
        in_string = False
        escaped = False
        for index in range(brace, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = index + 1
                    rest, after_line = _read_line(text, end)
                    body_start = after_line if not rest.strip() else end
                    return HeaderSpan(
                        notation=self.notation,
                        header=text[brace:end],
                        start=start,
                        end=end,
                        body_start=body_start,
                        line_offset=0,
                    )

        raise UnterminatedHeaderError(self.notation, "}")


YAML_DELIMITER = FenceDelimiter(Notation.YAML, "---", ("---", "..."))
TOML_DELIMITER = FenceDelimiter(Notation.TOML, "+++", ("+++",))
JSON_DELIMITER = BraceDelimiter()

# Priority order: the first delimiter that opens the document wins.
DEFAULT_DELIMITERS = (YAML_DELIMITER, TOML_DELIMITER, JSON_DELIMITER)


def detect_frontmatter(
    text: str,
    delimiters: Sequence = DEFAULT_DELIMITERS
) -> Optional[HeaderSpan]:
    """Locate the frontmatter block of a document.

    Args:
        text: Raw document text
        delimiters: Delimiter styles in priority order

    Returns:
        HeaderSpan for the first delimiter style that opens the document,
        or None when the document has no frontmatter

    Raises:
        UnterminatedHeaderError: If an opening delimiter is never closed
    """
    for delimiter in delimiters:
        if delimiter.opens(text):
            span = delimiter.locate(text)
            logger.debug(
                f"Detected {span.notation} frontmatter spanning characters {span.start}-{span.end}"
            )
            return span

    logger.debug("No frontmatter delimiter found")
    return None
