"""
Metadata validation.

This module checks extracted metadata against required-field and
value-kind rules. Every rule is evaluated and every violation is
reported, so callers can show all problems in one pass. Validation is a
pure read of the metadata.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from ..exceptions import ValidationFailedError
from .enums import FieldKind, ValueKind, ViolationKind
from .values import MappingValue, SequenceValue, StringValue, Value

logger = logging.getLogger(__name__)

_KIND_MATCHES = {
    FieldKind.STRING: (ValueKind.STRING,),
    FieldKind.NUMBER: (ValueKind.NUMBER,),
    FieldKind.BOOLEAN: (ValueKind.BOOLEAN,),
    FieldKind.SEQUENCE: (ValueKind.SEQUENCE,),
    FieldKind.MAPPING: (ValueKind.MAPPING,),
}


@dataclass(frozen=True)
class ValidationRule:
    """Expectation for a single metadata field.

    Attributes:
        field: Field name; dotted paths reach into nested mappings
        kinds: Accepted kinds (a union when more than one)
        required: Whether the field must be present and non-null
        allow_empty: Whether blank strings and empty containers pass
    """
    field: str
    kinds: Union[FieldKind, Tuple[FieldKind, ...]] = (FieldKind.ANY,)
    required: bool = True
    allow_empty: bool = False

    def __post_init__(self):
        kinds = self.kinds
        if isinstance(kinds, FieldKind):
            kinds = (kinds,)
        object.__setattr__(self, "kinds", tuple(kinds))
        if not self.kinds:
            raise ValueError(f"Rule for '{self.field}' must accept at least one kind")


@dataclass(frozen=True)
class Violation:
    """A single broken rule."""
    path: str
    kind: ViolationKind
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.kind} ({self.message})"

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "kind": str(self.kind), "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating metadata; valid only with zero violations."""
    violations: List[Violation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.valid

    def violations_for(self, path: str) -> List[Violation]:
        return [v for v in self.violations if v.path == path or v.path.startswith(f"{path}[")]

    def raise_for_violations(self) -> None:
        """Raise ValidationFailedError when any violation was found."""
        if self.violations:
            raise ValidationFailedError(self.violations)


class MetadataValidator:
    """
    Applies a fixed list of rules to metadata mappings.

    Rules are checked in order and violations accumulate; the validator
    never stops at the first problem.
    """

    def __init__(self, rules: Iterable[ValidationRule]):
        self.rules = list(rules)

    @staticmethod
    def kind_matches(value: Value, kind: FieldKind) -> bool:
        """Check a value against one expected kind.

        A string satisfies STRING_LIST so it can be split downstream.
        """
        if kind is FieldKind.ANY:
            return True
        if kind is FieldKind.STRING_LIST:
            if isinstance(value, StringValue):
                return True
            return isinstance(value, SequenceValue) and all(
                isinstance(item, StringValue) for item in value
            )
        return value.kind in _KIND_MATCHES[kind]

    def _check_rule(self, metadata: MappingValue, rule: ValidationRule) -> List[Violation]:
        value = metadata.lookup(rule.field)

        if value is None:
            if rule.required:
                return [Violation(
                    rule.field,
                    ViolationKind.MISSING_REQUIRED,
                    f"Required field '{rule.field}' is missing",
                )]
            return []

        if value.kind is ValueKind.NULL:
            if rule.required:
                return [Violation(
                    rule.field,
                    ViolationKind.EMPTY_VALUE,
                    f"Required field '{rule.field}' is null",
                )]
            return []

        if not any(self.kind_matches(value, kind) for kind in rule.kinds):
            expected = " or ".join(str(kind) for kind in rule.kinds)
            if isinstance(value, SequenceValue) and FieldKind.STRING_LIST in rule.kinds:
                return [
                    Violation(
                        f"{rule.field}[{index}]",
                        ViolationKind.WRONG_TYPE,
                        f"Expected string, got {item.kind}",
                    )
                    for index, item in enumerate(value)
                    if not isinstance(item, StringValue)
                ]
            return [Violation(
                rule.field,
                ViolationKind.WRONG_TYPE,
                f"Expected {expected}, got {value.kind}",
            )]

        if value.is_empty() and not rule.allow_empty:
            return [Violation(
                rule.field,
                ViolationKind.EMPTY_VALUE,
                f"Field '{rule.field}' is empty",
            )]

        return []

    def validate(self, metadata: MappingValue) -> ValidationResult:
        violations: List[Violation] = []
        for rule in self.rules:
            violations.extend(self._check_rule(metadata, rule))

        logger.debug(f"Validated {len(self.rules)} rules: {len(violations)} violation(s)")
        return ValidationResult(violations)


def validate(metadata: MappingValue, rules: Iterable[ValidationRule]) -> ValidationResult:
    """Validate metadata against rules, collecting every violation."""
    return MetadataValidator(rules).validate(metadata)


def _parse_kinds(raw: Any, field_name: str) -> Tuple[FieldKind, ...]:
    names = [raw] if isinstance(raw, str) else list(raw)
    try:
        return tuple(FieldKind(name) for name in names)
    except ValueError as e:
        raise ValueError(f"Unknown kind for field '{field_name}': {raw}") from e


def rules_from_config(config: Mapping[str, Any]) -> List[ValidationRule]:
    """Build rules from a validation configuration mapping.

    Each entry is either a kind name (``{"title": "string"}``) or a
    mapping with ``kind``, ``required`` and ``allow_empty`` keys.
    """
    rules = []
    for field_name, spec in config.items():
        if isinstance(spec, (str, list)):
            rules.append(ValidationRule(field_name, _parse_kinds(spec, field_name)))
            continue

        rules.append(ValidationRule(
            field=field_name,
            kinds=_parse_kinds(spec.get("kind", FieldKind.ANY.value), field_name),
            required=bool(spec.get("required", True)),
            allow_empty=bool(spec.get("allow_empty", False)),
        ))
    return rules
