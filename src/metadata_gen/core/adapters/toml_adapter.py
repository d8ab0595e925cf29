"""TOML notation adapter backed by tomllib (tomli before Python 3.11)."""

import re
from typing import Any, List, Optional, Tuple

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

from ...exceptions import NotationParseError
from ..enums import Notation
from ..values import (
    BooleanValue,
    MappingValue,
    NullValue,
    NumberValue,
    SequenceValue,
    StringValue,
    Value,
)
from .base import NotationAdapter, PREVIEW_LENGTH

_POSITION_RE = re.compile(r"\(at line (\d+), column (\d+)\)")
_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _render_string(value: str) -> str:
    out = []
    for char in value:
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{ord(char):04X}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def _render_key(key: str) -> str:
    return key if _BARE_KEY_RE.match(key) else _render_string(key)


def _render_number(number: float) -> str:
    if number != number:
        return "nan"
    if number in (float("inf"), float("-inf")):
        return "inf" if number > 0 else "-inf"
    return repr(number)


def _render_inline(value: Value) -> Optional[str]:
    """Render a value on a single line; None for values TOML cannot hold."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return _render_number(value.value)
    if isinstance(value, StringValue):
        return _render_string(value.value)
    if isinstance(value, SequenceValue):
        rendered = [_render_inline(item) for item in value]
        return "[" + ", ".join(item for item in rendered if item is not None) + "]"
    if isinstance(value, MappingValue):
        pairs = [
            f"{_render_key(key)} = {rendered}"
            for key, rendered in ((k, _render_inline(v)) for k, v in value.items())
            if rendered is not None
        ]
        return "{ " + ", ".join(pairs) + " }" if pairs else "{}"
    raise TypeError(f"Unsupported value: {value!r}")


def _render_table(mapping: MappingValue, path: Tuple[str, ...], lines: List[str]) -> None:
    tables = []
    for key, value in mapping.items():
        if isinstance(value, MappingValue):
            tables.append((key, value))
            continue
        rendered = _render_inline(value)
        if rendered is not None:
            lines.append(f"{_render_key(key)} = {rendered}")

    for key, table in tables:
        table_path = path + (key,)
        if lines:
            lines.append("")
        lines.append("[" + ".".join(_render_key(part) for part in table_path) + "]")
        _render_table(table, table_path, lines)


class TomlAdapter(NotationAdapter):
    """Adapter for ``+++`` delimited TOML headers.

    Dates and times are converted to ISO-8601 strings. TOML has no null,
    so null values are omitted when dumping.
    """

    notation = Notation.TOML

    def load(self, header: str) -> Any:
        try:
            return tomllib.loads(header)
        except tomllib.TOMLDecodeError as e:
            line = getattr(e, "lineno", None)
            column = getattr(e, "colno", None)
            message = getattr(e, "msg", None) or str(e)
            match = _POSITION_RE.search(str(e))
            if match and line is None:
                line, column = int(match.group(1)), int(match.group(2))
            message = _POSITION_RE.sub("", message).strip()
            raise NotationParseError(
                self.notation,
                f"Invalid TOML: {message}",
                line=line,
                column=column,
                content_preview=header[:PREVIEW_LENGTH]
            ) from e

    def dump(self, mapping: MappingValue) -> str:
        lines: List[str] = []
        _render_table(mapping, (), lines)
        return "\n".join(lines) + "\n" if lines else ""
