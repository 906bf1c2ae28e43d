"""Human-readable reports of validation results.

Used by the command line to explain why a form was rejected.
"""

from __future__ import annotations

from typing import List

from formjson.lib.engine import ValidationResult
from formjson.lib.variants import FormVariant

__all__ = [
    "format_validation_report",
    "describe_fields",
]


def format_validation_report(variant: FormVariant, result: ValidationResult) -> str:
    """Format a result's errors in field declaration order.

    Args:
        variant: Variant the result was evaluated against
        result: Evaluation result

    Returns:
        Formatted string report
    """
    if result.valid:
        return "Form is valid."

    lines: List[str] = []
    errors = [name for name in variant.field_names if name in result.errors]

    if errors:
        lines.append(f"Found {len(errors)} error(s):")
        lines.append("-" * 40)
        for name in errors:
            code = result.codes.get(name)
            suffix = f" ({code.value})" if code else ""
            lines.append(f"[ERROR] {name}: {result.errors[name]}{suffix}")
    else:
        lines.append("Form is invalid.")

    return "\n".join(lines)


def describe_fields(variant: FormVariant) -> str:
    """Table of a variant's fields, their constraints and payload keys."""
    lines = [f"{variant.name}: {variant.title}", "-" * 40]
    width = max(len(name) for name in variant.field_names)
    for rule in variant.rules:
        key = variant.payload_key(rule.name)
        mapped = f" -> {key}" if key != rule.name else ""
        lines.append(f"  {rule.name.ljust(width)}  {rule.describe()}{mapped}")
    for cross in variant.cross_rules:
        lines.append(f"  {cross.second} >= {cross.first}")
    return "\n".join(lines)
