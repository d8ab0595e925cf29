"""
Value Model Module

Canonical, notation-independent representation of metadata values.
Every datum extracted from frontmatter is converted into one of six
variants (null, boolean, number, string, sequence, mapping) so that
validation and derivation never depend on YAML, TOML or JSON types.

Values are built bottom-up from parsed trees and never reference
themselves. Mappings keep insertion order for deterministic output;
equality compares content, so a mapping read back from a notation that
reorders tables still compares equal.
"""

import datetime
import math
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple

from .enums import ValueKind


class ValueConversionError(ValueError):
    """Raised when a parsed tree contains data outside the value model."""


def format_number(number: float) -> str:
    """Render a number with the fixed formatting used for tags and keywords.

    Integral values below 1e16 render without a fractional part; everything
    else uses the shortest round-trip representation.
    """
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


@dataclass
class Value:
    """Base class of all value variants."""

    kind: ClassVar[ValueKind]

    @property
    def is_scalar(self) -> bool:
        return self.kind not in (ValueKind.SEQUENCE, ValueKind.MAPPING)

    def is_empty(self) -> bool:
        """True for values that carry no content."""
        return False

    def to_text(self) -> Optional[str]:
        """Render a scalar as text; containers return None."""
        return None

    def to_native(self) -> Any:
        raise NotImplementedError


@dataclass
class NullValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.NULL

    def is_empty(self) -> bool:
        return True

    def to_text(self) -> Optional[str]:
        return ""

    def to_native(self) -> Any:
        return None


@dataclass
class BooleanValue(Value):
    value: bool = False
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    def to_text(self) -> Optional[str]:
        return "true" if self.value else "false"

    def to_native(self) -> Any:
        return self.value


@dataclass
class NumberValue(Value):
    value: float = 0.0
    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    def __post_init__(self):
        self.value = float(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumberValue):
            return NotImplemented
        # NaN == NaN so parsed documents compare equal to themselves
        if math.isnan(self.value) and math.isnan(other.value):
            return True
        return self.value == other.value

    def to_text(self) -> Optional[str]:
        return format_number(self.value)

    def to_native(self) -> Any:
        return self.value


@dataclass
class StringValue(Value):
    value: str = ""
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def is_empty(self) -> bool:
        return not self.value.strip()

    def to_text(self) -> Optional[str]:
        return self.value

    def to_native(self) -> Any:
        return self.value


@dataclass
class SequenceValue(Value):
    items: List[Value] = field(default_factory=list)
    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def is_empty(self) -> bool:
        return not self.items

    def to_native(self) -> Any:
        return [item.to_native() for item in self.items]


@dataclass
class MappingValue(Value):
    """Ordered string-keyed mapping of values."""

    entries: Dict[str, Value] = field(default_factory=dict)
    kind: ClassVar[ValueKind] = ValueKind.MAPPING

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        return self.entries.get(key, default)

    def keys(self) -> List[str]:
        return list(self.entries.keys())

    def items(self) -> List[Tuple[str, Value]]:
        return list(self.entries.items())

    def values(self) -> List[Value]:
        return list(self.entries.values())

    def is_empty(self) -> bool:
        return not self.entries

    def lookup(self, path: str) -> Optional[Value]:
        """Resolve a field by literal key, falling back to a dotted path.

        Args:
            path: Key such as "title" or nested path such as "author.name"

        Returns:
            The value, or None when any segment is missing
        """
        if path in self.entries:
            return self.entries[path]

        current: Value = self
        for segment in path.split("."):
            if not isinstance(current, MappingValue) or segment not in current.entries:
                return None
            current = current.entries[segment]
        return current

    def to_native(self) -> Any:
        return {key: value.to_native() for key, value in self.entries.items()}


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    scalar = from_native(key)
    if not scalar.is_scalar:
        raise ValueConversionError(f"Unsupported mapping key: {key!r}")
    return scalar.to_text()


def from_native(obj: Any, _active: Optional[set] = None) -> Value:
    """Convert a generic parsed tree into the value model.

    Dates and times become ISO-8601 strings, binary data is decoded as
    UTF-8 and sets become sorted sequences. Self-referencing containers (for
    example recursive YAML aliases) are rejected.

    Args:
        obj: Tree made of dicts, lists and scalars as produced by a parser

    Returns:
        The equivalent Value

    Raises:
        ValueConversionError: If the tree is cyclic, holds unsupported data
            or has mapping keys that collide once converted to text
    """
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BooleanValue(obj)
    if isinstance(obj, (int, float)):
        try:
            return NumberValue(float(obj))
        except OverflowError as e:
            raise ValueConversionError(f"Number out of range: {obj}") from e
    if isinstance(obj, str):
        return StringValue(obj)
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return StringValue(obj.isoformat())
    if isinstance(obj, bytes):
        return StringValue(obj.decode("utf-8", errors="replace"))

    if not isinstance(obj, (dict, list, tuple, set, frozenset)):
        raise ValueConversionError(f"Unsupported value type: {type(obj).__name__}")

    active = _active if _active is not None else set()
    if id(obj) in active:
        raise ValueConversionError("Recursive structure cannot be represented")
    active.add(id(obj))
    try:
        if isinstance(obj, dict):
            entries: Dict[str, Value] = {}
            for key, value in obj.items():
                text = _key_text(key)
                if text in entries:
                    raise ValueConversionError(
                        f"Duplicate mapping key '{text}' (from {key!r})"
                    )
                entries[text] = from_native(value, active)
            return MappingValue(entries)
        items = obj
        if isinstance(obj, (set, frozenset)):
            # set iteration order depends on hashing
            items = sorted(obj, key=lambda member: (type(member).__name__, str(member)))
        return SequenceValue([from_native(item, active) for item in items])
    finally:
        active.discard(id(obj))


def mapping_from_native(obj: Any) -> MappingValue:
    """Convert a parsed top-level tree that must be a mapping."""
    value = from_native(obj)
    if not isinstance(value, MappingValue):
        raise ValueConversionError(
            f"Top-level metadata must be a mapping, got {value.kind}"
        )
    return value
