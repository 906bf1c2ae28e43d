"""Structured exception hierarchy for formjson.

Validation problems in user input are never raised; they are reported in
the engine's error map. These exceptions cover misuse of the library and
failures of external collaborators (settings files, the clipboard).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "FormError",
    "ConfigurationError",
    "UnknownFieldError",
    "ValidationError",
    "ClipboardError",
]


class FormError(Exception):
    """Base exception for all formjson errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        variant: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.variant = variant
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if variant:
            parts.insert(0, f"[{variant}]")

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "variant": self.variant,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(FormError):
    """Error in formjson configuration.

    Raised for malformed settings values, unknown form variants and
    unknown clipboard kinds.
    """

    def __init__(
        self,
        message: str,
        *,
        setting: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.setting = setting
        self.value = value

        details = kwargs.pop("details", {})
        if setting:
            details["setting"] = setting
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)


class UnknownFieldError(FormError):
    """A field name that the form variant does not declare."""

    def __init__(
        self,
        field: str,
        *,
        known_fields: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.known_fields = list(known_fields or [])

        details = kwargs.pop("details", {})
        details["field"] = field

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion and self.known_fields:
            suggestion = f"Use one of: {', '.join(self.known_fields)}"

        super().__init__(
            f"Unknown field '{field}'",
            details=details,
            suggestion=suggestion,
            **kwargs,
        )


class ValidationError(FormError):
    """Form values failed validation where a valid form was required.

    Raised when a JSON payload is requested from an invalid result.
    """

    def __init__(
        self,
        message: str,
        *,
        issues: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        self.issues = dict(issues or {})

        details = kwargs.pop("details", {})
        if self.issues:
            details["issue_count"] = len(self.issues)

        if self.issues:
            issue_lines = "\n".join(
                f"  - {field}: {msg}" for field, msg in self.issues.items()
            )
            message = f"{message}\n\nIssues found:\n{issue_lines}"

        super().__init__(message, details=details, **kwargs)


class ClipboardError(FormError):
    """Copying text to the clipboard failed."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.cause = cause

        details = kwargs.pop("details", {})
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = (
                "Install a clipboard backend (xclip, xsel or wl-clipboard on Linux) "
                "or set clipboard: memory in .formjson.yaml."
            )

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)
