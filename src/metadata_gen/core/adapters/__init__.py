"""
Notation Adapters

One adapter per supported notation, each converting header text into
the value model:
- yaml_adapter: YAML headers via PyYAML
- toml_adapter: TOML headers via tomllib/tomli
- json_adapter: JSON headers via json
"""

from ..enums import Notation
from .base import NotationAdapter
from .json_adapter import JsonAdapter
from .toml_adapter import TomlAdapter
from .yaml_adapter import YamlAdapter


def adapter_for(notation: Notation) -> NotationAdapter:
    """Create the adapter for a notation."""
    if notation is Notation.YAML:
        return YamlAdapter()
    if notation is Notation.TOML:
        return TomlAdapter()
    if notation is Notation.JSON:
        return JsonAdapter()
    raise ValueError(f"Unsupported notation: {notation}")


__all__ = [
    'NotationAdapter',
    'YamlAdapter',
    'TomlAdapter',
    'JsonAdapter',
    'adapter_for',
]
