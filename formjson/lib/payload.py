"""Build the JSON payload from a successful evaluation.

All form values travel as strings until this point. Here integer fields
become numbers, enum fields become booleans and the variant's payload keys
replace field names.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from formjson.lib.engine import DisclosureMode, ValidationResult
from formjson.lib.errors import ValidationError
from formjson.lib.rules import FieldKind, FieldRule
from formjson.lib.variants import FormVariant

__all__ = [
    "build_payload",
    "render_json",
    "convert",
]


def _to_native(rule: FieldRule, value: str) -> Any:
    if rule.kind == FieldKind.INTEGER:
        # Leading zeros are valid input; strip them so int() sees a short string.
        return int(value.lstrip("0") or "0")
    if rule.kind == FieldKind.ENUM:
        return value == "true"
    return value


def build_payload(variant: FormVariant, result: ValidationResult) -> Dict[str, Any]:
    """Convert a valid result's normalized values into the variant's payload.

    Args:
        variant: Variant the result was evaluated against
        result: A valid ValidationResult

    Returns:
        Dict keyed by payload keys, in field declaration order

    Raises:
        ValidationError: If the result is not valid
    """
    if not result.valid:
        raise ValidationError(
            "Cannot build a payload from invalid form values",
            issues=result.errors,
            variant=variant.name,
        )

    return {
        variant.payload_key(rule.name): _to_native(rule, result.normalized[rule.name])
        for rule in variant.rules
    }


def render_json(payload: Mapping[str, Any], indent: Optional[int] = 2) -> str:
    """Serialize a payload, keeping non-ASCII text as-is.

    ``indent=None`` produces the compact form without spaces.
    """
    if indent is None:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=False, indent=indent)


def convert(
    variant: FormVariant, snapshot: Mapping[str, Optional[str]]
) -> Dict[str, Any]:
    """Evaluate in final mode and build the payload in one step.

    Raises:
        ValidationError: If any field fails validation
    """
    result = variant.evaluate(snapshot, DisclosureMode.final())
    return build_payload(variant, result)
