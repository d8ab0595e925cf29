"""
Enumeration types for metadata classification.

This module defines the enumeration types shared by the value model,
the validator and the meta-tag generator.
"""

from enum import Enum


class Notation(Enum):
    """Supported frontmatter notations, in detection priority order."""
    YAML = "yaml"
    TOML = "toml"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


class ValueKind(Enum):
    """Variant tag of a metadata value."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    def __str__(self) -> str:
        return self.value


class FieldKind(Enum):
    """Expected shape of a field in a validation rule."""
    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRING_LIST = "string-list"

    def __str__(self) -> str:
        return self.value


class ViolationKind(Enum):
    """Rule broken by a validation violation."""
    MISSING_REQUIRED = "missing-required"
    WRONG_TYPE = "wrong-type"
    EMPTY_VALUE = "empty-value"

    def __str__(self) -> str:
        return self.value


class AttributeKind(Enum):
    """HTML attribute used to name a meta tag."""
    NAME = "name"
    PROPERTY = "property"
    HTTP_EQUIV = "http-equiv"

    def __str__(self) -> str:
        return self.value
