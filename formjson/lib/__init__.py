"""Core formjson library: field rules, the validation engine and payload building.

Nothing in this package depends on the terminal UI, so it can be used from
scripts and tests directly.
"""

from formjson.lib.engine import DisclosureMode, ValidationResult, evaluate, normalize
from formjson.lib.errors import (
    ClipboardError,
    ConfigurationError,
    FormError,
    UnknownFieldError,
    ValidationError,
)
from formjson.lib.payload import build_payload, convert, render_json
from formjson.lib.rules import (
    Check,
    DateOrderRule,
    ErrorCode,
    FieldKind,
    FieldRule,
)
from formjson.lib.variants import (
    BASIC_FORM,
    DEFAULT_VARIANT,
    LOTTERY_FORM,
    VARIANTS,
    FormVariant,
    get_variant,
    list_variants,
)

__all__ = [
    # Engine
    "DisclosureMode",
    "ValidationResult",
    "evaluate",
    "normalize",
    # Rules
    "Check",
    "DateOrderRule",
    "ErrorCode",
    "FieldKind",
    "FieldRule",
    # Variants
    "BASIC_FORM",
    "LOTTERY_FORM",
    "VARIANTS",
    "DEFAULT_VARIANT",
    "FormVariant",
    "get_variant",
    "list_variants",
    # Payload
    "build_payload",
    "convert",
    "render_json",
    # Errors
    "FormError",
    "ConfigurationError",
    "UnknownFieldError",
    "ValidationError",
    "ClipboardError",
]
