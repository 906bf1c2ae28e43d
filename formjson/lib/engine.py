"""Validation engine: evaluate a form variant's rules against a value snapshot.

The engine is a single pure function. Given raw string values and a
disclosure mode it returns whether the form is valid, which errors should
be shown, and the normalized values:

    >>> from formjson.lib.variants import BASIC_FORM
    >>> result = evaluate(BASIC_FORM, {"name": "山田太郎", "age": "30",
    ...     "bool": "true", "date": "2024-01-01", "date2": "2024-01-02"})
    >>> result.valid
    True

Disclosure mode decides only which problems are written into the error
map. ``show_errors=False`` gives a silent probe whose ``valid`` matches the
final (submit) evaluation; touched gating lets an untouched empty field
pass quietly while the user is still filling in the form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Set

from formjson.lib.rules import ErrorCode

if TYPE_CHECKING:
    from formjson.lib.variants import FormVariant

__all__ = [
    "DisclosureMode",
    "ValidationResult",
    "evaluate",
    "normalize",
]


@dataclass(frozen=True)
class DisclosureMode:
    """Which detected problems are surfaced in the error map.

    Attributes:
        allow_empty: Never report empty fields as missing
        show_errors: Write messages into the error map (False = silent probe)
        show_untouched_required: Check requiredness even for untouched fields
        touched_fields: Field name -> whether the user has interacted with it
    """

    allow_empty: bool = False
    show_errors: bool = True
    show_untouched_required: bool = True
    touched_fields: Mapping[str, bool] = field(default_factory=dict)

    def should_validate_required(self, name: str) -> bool:
        return self.show_untouched_required or bool(self.touched_fields.get(name))

    @classmethod
    def final(cls) -> "DisclosureMode":
        """Submit-time mode: every problem is shown."""
        return cls()

    @classmethod
    def silent(cls) -> "DisclosureMode":
        """Probe mode: compute validity without populating errors."""
        return cls(show_errors=False)

    @classmethod
    def incremental(
        cls,
        touched: Mapping[str, bool] | Set[str],
        show_all: bool = False,
    ) -> "DisclosureMode":
        """Edit-time mode: required errors only for touched fields.

        Args:
            touched: Touched field names, as a set or a name -> bool mapping
            show_all: Full disclosure after a rejected submit
        """
        if isinstance(touched, (set, frozenset)):
            touched = {name: True for name in touched}
        return cls(
            show_untouched_required=show_all,
            touched_fields=dict(touched),
        )


@dataclass
class ValidationResult:
    """Outcome of one evaluation.

    Attributes:
        valid: True iff every rule passed (independent of show_errors)
        errors: Field name -> message for surfaced problems
        codes: Field name -> error code for the same fields as ``errors``
        normalized: Field name -> normalized string value
    """

    valid: bool
    errors: Dict[str, str] = field(default_factory=dict)
    codes: Dict[str, ErrorCode] = field(default_factory=dict)
    normalized: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": dict(self.errors),
            "codes": {name: code.value for name, code in self.codes.items()},
            "normalized": dict(self.normalized),
        }


def normalize(
    variant: "FormVariant", snapshot: Mapping[str, Optional[str]]
) -> Dict[str, str]:
    """Normalized values for every declared field, in declaration order."""
    return {rule.name: rule.normalize(snapshot.get(rule.name)) for rule in variant.rules}


def evaluate(
    variant: "FormVariant",
    snapshot: Mapping[str, Optional[str]],
    mode: Optional[DisclosureMode] = None,
) -> ValidationResult:
    """Evaluate a variant's field rules against a value snapshot.

    Args:
        variant: Field Rule Set to evaluate
        snapshot: Field name -> raw string value; missing fields count as empty
        mode: Disclosure mode (defaults to final mode)

    Returns:
        ValidationResult; never raises for malformed values
    """
    mode = mode or DisclosureMode()
    normalized = normalize(variant, snapshot)
    result = ValidationResult(valid=True, normalized=normalized)
    failed: Set[str] = set()

    def report(name: str, code: ErrorCode, message: str) -> None:
        failed.add(name)
        result.valid = False
        if mode.show_errors:
            result.errors[name] = message
            result.codes[name] = code

    for rule in variant.rules:
        value = normalized[rule.name]

        if not value:
            if not mode.allow_empty and mode.should_validate_required(rule.name):
                report(rule.name, ErrorCode.REQUIRED_FIELD_MISSING, rule.required_message)
            continue

        check = rule.first_failure(value)
        if check is not None:
            report(rule.name, check.code, check.message)

    for cross in variant.cross_rules:
        first = normalized.get(cross.first, "")
        second = normalized.get(cross.second, "")
        if not first or not second:
            continue
        if cross.first in failed or cross.second in failed:
            continue
        if cross.violated(first, second):
            report(cross.second, cross.code, cross.message)

    return result
