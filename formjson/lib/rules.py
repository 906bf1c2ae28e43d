"""Declarative field rules shared by every form variant.

A field rule is a required-message plus an ordered chain of checks. Each
check pairs a failure predicate with an error code and a message; the
engine walks the chain and stops at the first failure, so at most one
message is reported per field.

Rules are built with the factory functions below rather than by hand:

    >>> rule = integer_rule("age", label="age", required="年齢を入力してください。",
    ...                     minimum=1, maximum=10000)
    >>> rule.first_failure("0").code
    <ErrorCode.OUT_OF_RANGE: 'out_of_range'>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

import regex

from formjson.lib import patterns

__all__ = [
    "ErrorCode",
    "FieldKind",
    "Check",
    "FieldRule",
    "DateOrderRule",
    "text_rule",
    "integer_rule",
    "enum_rule",
    "date_rule",
    "BOOLEAN_OPTIONS",
]

BOOLEAN_OPTIONS: Tuple[str, ...] = ("true", "false")

NON_NUMERIC_MESSAGE = "数字のみ入力してください。"
MALFORMED_DATE_MESSAGE = "YYYY-MM-DD形式で入力してください。"


class ErrorCode(str, Enum):
    """Kinds of validation failure; one user-facing message per kind and rule."""

    REQUIRED_FIELD_MISSING = "required_field_missing"
    FORBIDDEN_CHARACTER = "forbidden_character"
    ENVIRONMENT_DEPENDENT_CHARACTER = "environment_dependent_character"
    DISALLOWED_SCRIPT = "disallowed_script"
    NON_NUMERIC_VALUE = "non_numeric_value"
    OUT_OF_RANGE = "out_of_range"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    MALFORMED_DATE = "malformed_date"
    DATE_ORDER_VIOLATION = "date_order_violation"


class FieldKind(str, Enum):
    """Semantic type of a field; decides trimming and payload conversion."""

    TEXT = "text"
    INTEGER = "integer"
    ENUM = "enum"
    DATE = "date"


@dataclass(frozen=True)
class Check:
    """One link in a field's check chain.

    Attributes:
        code: Error code reported when the check fails
        message: User-facing message reported when the check fails
        fails: Predicate over the normalized, non-empty value
    """

    code: ErrorCode
    message: str
    fails: Callable[[str], bool] = field(compare=False)


@dataclass(frozen=True)
class FieldRule:
    """Constraints for a single form field.

    Attributes:
        name: Field name as it appears in the value snapshot
        kind: Semantic type of the field
        label: Display label for the presentation layer
        required_message: Message reported when a required value is empty
        checks: Ordered check chain run on non-empty values
        trim: Whether normalization strips surrounding whitespace
        options: Allowed values for enum fields
        minimum: Inclusive lower bound for integer fields
        maximum: Inclusive upper bound for integer fields
        hint: Short help text shown next to the input
    """

    name: str
    kind: FieldKind
    label: str
    required_message: str
    checks: Tuple[Check, ...] = ()
    trim: bool = False
    options: Tuple[str, ...] = ()
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    hint: str = ""

    def normalize(self, value: Optional[str]) -> str:
        """Canonical string form of a raw value; never fails."""
        if value is None:
            return ""
        text = value if isinstance(value, str) else str(value)
        return text.strip() if self.trim else text

    def first_failure(self, value: str) -> Optional[Check]:
        """Return the first failing check for a non-empty value, or None."""
        for check in self.checks:
            if check.fails(value):
                return check
        return None

    def describe(self) -> str:
        """One-line summary of the constraints, used by ``formjson fields``."""
        if self.kind == FieldKind.INTEGER:
            return f"integer {self.minimum}..{self.maximum}"
        if self.kind == FieldKind.ENUM:
            return "one of " + " / ".join(self.options)
        if self.kind == FieldKind.DATE:
            return "date YYYY-MM-DD"
        return "text"


@dataclass(frozen=True)
class DateOrderRule:
    """Second date must be the same day as, or later than, the first.

    Evaluated only when both dates are present and individually valid.
    ISO dates compare correctly as strings, so no parsing is needed.
    """

    first: str
    second: str
    message: str
    code: ErrorCode = ErrorCode.DATE_ORDER_VIOLATION

    def violated(self, first_value: str, second_value: str) -> bool:
        return second_value < first_value


def text_rule(
    name: str,
    *,
    label: str,
    required: str,
    forbidden: regex.Pattern = patterns.FORBIDDEN_CHARACTERS,
    allowed: regex.Pattern = patterns.JAPANESE_TEXT,
    script_message: str = "日本語の文字と数字のみ入力してください。",
    hint: str = "",
) -> FieldRule:
    """Free text limited to Japanese scripts, Latin letters and digits."""
    checks = (
        Check(
            ErrorCode.FORBIDDEN_CHARACTER,
            "禁止文字が含まれています。",
            lambda value: patterns.contains(forbidden, value),
        ),
        Check(
            ErrorCode.ENVIRONMENT_DEPENDENT_CHARACTER,
            "環境依存文字は使用できません。",
            lambda value: patterns.contains(
                patterns.ENVIRONMENT_DEPENDENT_CHARACTERS, value
            ),
        ),
        Check(
            ErrorCode.DISALLOWED_SCRIPT,
            script_message,
            lambda value: not patterns.matches(allowed, value),
        ),
    )
    return FieldRule(
        name=name,
        kind=FieldKind.TEXT,
        label=label,
        required_message=required,
        checks=checks,
        trim=True,
        hint=hint,
    )


def _out_of_range(minimum: int, maximum: int) -> Callable[[str], bool]:
    def check(value: str) -> bool:
        digits = value.lstrip("0") or "0"
        # Longer than the maximum cannot be in range; int() caps digit strings.
        if len(digits) > len(str(maximum)):
            return True
        return not minimum <= int(digits) <= maximum

    return check


def integer_rule(
    name: str,
    *,
    label: str,
    required: str,
    minimum: int,
    maximum: int,
    hint: str = "",
) -> FieldRule:
    """Non-negative integer written with ASCII digits, within [minimum, maximum]."""
    # The range check only runs after the digit check has passed.
    checks = (
        Check(
            ErrorCode.NON_NUMERIC_VALUE,
            NON_NUMERIC_MESSAGE,
            lambda value: not patterns.matches(patterns.DIGITS, value),
        ),
        Check(
            ErrorCode.OUT_OF_RANGE,
            f"{minimum}〜{maximum}の範囲で入力してください。",
            _out_of_range(minimum, maximum),
        ),
    )
    return FieldRule(
        name=name,
        kind=FieldKind.INTEGER,
        label=label,
        required_message=required,
        checks=checks,
        trim=True,
        minimum=minimum,
        maximum=maximum,
        hint=hint,
    )


def enum_rule(
    name: str,
    *,
    label: str,
    message: str = "true か false を選択してください。",
    options: Tuple[str, ...] = BOOLEAN_OPTIONS,
) -> FieldRule:
    """Exactly one of a fixed set of strings."""
    checks = (
        Check(
            ErrorCode.INVALID_ENUM_VALUE,
            message,
            lambda value: value not in options,
        ),
    )
    return FieldRule(
        name=name,
        kind=FieldKind.ENUM,
        label=label,
        required_message=message,
        checks=checks,
        options=options,
    )


def _malformed_date(value: str) -> bool:
    match = patterns.ISO_DATE.fullmatch(value)
    if match is None:
        return True
    # Field ranges only; 2024-02-30 is accepted.
    month = int(match.group("month"))
    day = int(match.group("day"))
    return not (1 <= month <= 12 and 1 <= day <= 31)


def date_rule(
    name: str,
    *,
    label: str,
    required: str = "日付を入力してください。",
) -> FieldRule:
    """Date written as YYYY-MM-DD."""
    checks = (
        Check(ErrorCode.MALFORMED_DATE, MALFORMED_DATE_MESSAGE, _malformed_date),
    )
    return FieldRule(
        name=name,
        kind=FieldKind.DATE,
        label=label,
        required_message=required,
        checks=checks,
        hint="YYYY-MM-DD",
    )
