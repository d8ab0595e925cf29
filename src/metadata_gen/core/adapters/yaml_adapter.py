"""YAML notation adapter backed by PyYAML's safe loader."""

from typing import Any

import yaml

from ...exceptions import NotationParseError
from ..enums import Notation
from ..values import MappingValue
from .base import NotationAdapter, PREVIEW_LENGTH


class YamlAdapter(NotationAdapter):
    """Adapter for ``---`` delimited YAML headers.

    The safe loader resolves anchors, aliases and merge keys to plain
    values and drops comments. Application-specific tags are rejected.
    """

    notation = Notation.YAML

    def load(self, header: str) -> Any:
        try:
            return yaml.safe_load(header)
        except yaml.YAMLError as e:
            line = column = None
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                line = mark.line + 1
                column = mark.column + 1
            problem = getattr(e, "problem", None) or str(e)
            raise NotationParseError(
                self.notation,
                f"Invalid YAML: {problem}",
                line=line,
                column=column,
                content_preview=header[:PREVIEW_LENGTH]
            ) from e

    def dump(self, mapping: MappingValue) -> str:
        if not mapping:
            return ""
        return yaml.safe_dump(
            mapping.to_native(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
