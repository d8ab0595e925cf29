"""
Exceptions package for metadata-gen.

This package contains the exception classes raised while extracting,
validating and processing frontmatter metadata, and while loading
configuration.
"""

from .metadata_exceptions import (
    MetadataError,
    ExtractionError,
    UnterminatedHeaderError,
    NotationParseError,
    ValidationFailedError,
    MissingFieldError,
    DateParseError,
    DocumentReadError,
)

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
    ConfigurationSchemaError,
)

__all__ = [
    # Metadata exceptions
    "MetadataError",
    "ExtractionError",
    "UnterminatedHeaderError",
    "NotationParseError",
    "ValidationFailedError",
    "MissingFieldError",
    "DateParseError",
    "DocumentReadError",
    # Configuration exceptions
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    "ConfigurationSchemaError",
]
