"""
Metadata extraction and processing exceptions.

Exception classes raised by frontmatter detection, notation parsing,
validation and metadata processing. Every exception derives from
MetadataError so callers can catch the whole family at once, while
ExtractionError distinguishes "frontmatter present but malformed" from
the non-error "no frontmatter" outcome.
"""

from typing import Any, List, Optional


class MetadataError(Exception):
    """Base exception for all metadata-gen errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        msg = super().__str__()

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"

        return msg


class ExtractionError(MetadataError):
    """Raised when a frontmatter block is present but cannot be extracted."""


class UnterminatedHeaderError(ExtractionError):
    """Raised when an opening delimiter has no matching closing delimiter.

    Attributes:
        notation: Notation whose opening delimiter was detected
        delimiter: Closing delimiter that was expected
    """

    def __init__(self, notation: Any, delimiter: str) -> None:
        self.notation = notation
        self.delimiter = delimiter
        super().__init__(
            f"Unterminated {notation} header: no closing '{delimiter}' before end of input",
            suggestions=[f"Add a closing '{delimiter}' line after the metadata block"],
        )


class NotationParseError(ExtractionError):
    """Raised when a header block fails to parse in its notation.

    This exception normalizes the error types of the underlying notation
    parsers so callers never depend on a third-party error shape.

    Attributes:
        notation: Notation that failed to parse
        line: 1-based line number within the header (if available)
        column: 1-based column number within the header (if available)
        content_preview: Preview of the problematic header for debugging
    """

    def __init__(
        self,
        notation: Any,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        content_preview: Optional[str] = None
    ) -> None:
        self.notation = notation
        self.line = line
        self.column = column
        self.content_preview = content_preview
        self.detail = message

        error_parts = [f"Parse failed in notation {notation}: {message}"]
        if line is not None:
            position = f"at line {line}"
            if column is not None:
                position += f", column {column}"
            error_parts.append(position)

        super().__init__(" ".join(error_parts))

    @property
    def position(self) -> Optional[tuple]:
        """(line, column) when the parser reported a location."""
        if self.line is None:
            return None
        return (self.line, self.column)


class ValidationFailedError(MetadataError):
    """Raised when metadata breaks one or more validation rules.

    Attributes:
        violations: Every violation found, in rule order
    """

    def __init__(self, violations: List[Any]) -> None:
        self.violations = list(violations)
        summary = "; ".join(str(v) for v in self.violations)
        super().__init__(
            f"Metadata validation failed with {len(self.violations)} violation(s): {summary}"
        )


class MissingFieldError(MetadataError):
    """Raised when metadata processing requires a field that is absent."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required metadata field: {field}")


class DateParseError(MetadataError):
    """Raised when a date value cannot be standardized."""

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        self.value = value
        super().__init__(f"Failed to parse date: {message}")


class DocumentReadError(MetadataError):
    """Raised when a document file cannot be read as UTF-8 text."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(
            message,
            suggestions=["Check that the file exists and is UTF-8 encoded"],
        )
