"""Form session state for the converter.

This class provides a UI-agnostic representation of one form session that
can be tested without a terminal. It owns the field values, the touched
set, the full-disclosure flag, the output panel and the copy status, and
runs the validation engine in the right disclosure mode for each event:

- change/blur: incremental mode (touched fields only, unless a rejected
  submit escalated to full disclosure), plus a silent probe that drives the
  submit button and the output placeholder
- submit: final mode; a valid form produces the JSON output
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, Dict, Optional

from formjson.lib.clipboard import ClipboardService, create_clipboard
from formjson.lib.engine import DisclosureMode, ValidationResult
from formjson.lib.errors import ClipboardError, UnknownFieldError
from formjson.lib.logging import get_form_logger
from formjson.lib.payload import build_payload, render_json
from formjson.lib.variants import BASIC_FORM, FormVariant, get_variant
from formjson.tui.constants import (
    COPY_FAILED,
    COPY_STATUS_SECONDS,
    COPY_SUCCEEDED,
    JSON_INDENT,
    OUTPUT_FIX_INPUT,
    OUTPUT_PLACEHOLDER,
)
from formjson.tui.models.field_value import FieldValue

__all__ = [
    "FormSession",
    "SessionPhase",
    "Scheduler",
    "start_timer",
]

# (delay_seconds, callback) -> handle with cancel()
Scheduler = Callable[[float, Callable[[], None]], Any]


def start_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Default scheduler: run callback once on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class SessionPhase(str, Enum):
    """Where the session is in the disclosure/output cycle."""

    PRISTINE = "pristine"  # Nothing touched yet
    INCREMENTAL = "incremental"  # Errors shown for touched fields
    FULL_DISCLOSURE = "full_disclosure"  # After a rejected submit
    OUTPUT = "output"  # Valid submit; JSON in the output panel


class FormSession:
    """UI-agnostic state for one form session.

    Attributes:
        variant: Form variant being filled in
        fields: Field name -> FieldValue, in declaration order
        full_disclosure: Show required errors for untouched fields too
        output: Text of the output panel
        is_json_output: Whether ``output`` holds generated JSON
        copy_status: Transient message from the last copy attempt
        payload: Last generated payload, if any
    """

    def __init__(
        self,
        variant: FormVariant = BASIC_FORM,
        *,
        clipboard: Optional[ClipboardService] = None,
        scheduler: Optional[Scheduler] = None,
        copy_status_seconds: float = COPY_STATUS_SECONDS,
        json_indent: Optional[int] = JSON_INDENT,
        on_update: Optional[Callable[[], None]] = None,
    ) -> None:
        self.variant = variant
        self.fields: Dict[str, FieldValue] = {
            name: FieldValue(name=name) for name in variant.field_names
        }
        self.full_disclosure = False
        self.output = OUTPUT_PLACEHOLDER
        self.is_json_output = False
        self.copy_status = ""
        self.payload: Optional[Dict[str, Any]] = None

        self.clipboard = clipboard
        self.scheduler: Scheduler = scheduler or start_timer
        self.copy_status_seconds = copy_status_seconds
        self.json_indent = json_indent
        self.on_update = on_update
        self._copy_timer: Any = None

        self._logger = get_form_logger(__name__)
        self._logger.set_context(variant=variant.name)

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        variant_name: Optional[str] = None,
        **kwargs: Any,
    ) -> "FormSession":
        """Create a session configured from FormSettings.

        Args:
            settings: Loaded FormSettings
            variant_name: Overrides the settings' default variant
            **kwargs: Passed through to the constructor
        """
        variant = get_variant(variant_name or settings.variant)
        kwargs.setdefault("clipboard", ClipboardService(create_clipboard(settings.clipboard)))
        kwargs.setdefault("copy_status_seconds", settings.copy_status_seconds)
        kwargs.setdefault("json_indent", settings.json_indent)
        return cls(variant, **kwargs)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def values(self) -> Dict[str, str]:
        """Current value snapshot in declaration order."""
        return {name: field.value for name, field in self.fields.items()}

    @property
    def touched_fields(self) -> Dict[str, bool]:
        return {name: True for name, field in self.fields.items() if field.touched}

    @property
    def errors(self) -> Dict[str, str]:
        return {name: field.error for name, field in self.fields.items() if field.error}

    @property
    def phase(self) -> SessionPhase:
        if self.is_json_output:
            return SessionPhase.OUTPUT
        if self.full_disclosure:
            return SessionPhase.FULL_DISCLOSURE
        if self.touched_fields:
            return SessionPhase.INCREMENTAL
        return SessionPhase.PRISTINE

    @property
    def can_submit(self) -> bool:
        """Silent probe: would a submit succeed right now?"""
        return self.probe().valid

    def probe(self) -> ValidationResult:
        return self.variant.evaluate(self.values, DisclosureMode.silent())

    def get_value(self, name: str) -> str:
        return self._field(name).value

    def error_for(self, name: str) -> str:
        return self._field(name).error or ""

    # ------------------------------------------------------------------
    # Events from the presentation layer
    # ------------------------------------------------------------------

    def change(self, name: str, value: str) -> ValidationResult:
        """A field's value was edited."""
        self._field(name).set_value(value)
        return self._apply_validation(reset_output=True)

    def blur(self, name: str) -> ValidationResult:
        """Focus left a field. Leaves generated JSON in place."""
        self._field(name).mark_touched()
        return self._apply_validation(reset_output=not self.is_json_output)

    def submit(self) -> ValidationResult:
        """Validate every field and, if valid, generate the JSON output."""
        result = self.variant.evaluate(self.values, DisclosureMode.final())
        self._set_errors(result)
        self._cancel_copy_timer()
        self.copy_status = ""

        if not result.valid:
            if not self.full_disclosure:
                self._logger.debug("Escalating to full disclosure")
            self.full_disclosure = True
            self.output = OUTPUT_FIX_INPUT
            self.is_json_output = False
            self.payload = None
            self._logger.info("Submit rejected: %d field error(s)", len(result.errors))
            return result

        self.payload = build_payload(self.variant, result)
        self.output = render_json(self.payload, indent=self.json_indent)
        self.is_json_output = True

        if self.variant.reset_disclosure_on_valid:
            self.full_disclosure = False
            for field in self.fields.values():
                field.reset_touched()

        self._logger.info("Form submitted")
        return result

    def copy_output(self) -> bool:
        """Copy generated JSON to the clipboard.

        Returns:
            True if the copy succeeded; False on failure or when there is
            no JSON to copy
        """
        if not self.is_json_output:
            return False

        try:
            self._get_clipboard().copy_text(self.output)
        except ClipboardError as e:
            self._logger.warning("Copy failed: %s", e.message, extra={"cause": e.details.get("cause")})
            self.copy_status = COPY_FAILED
            copied = False
        else:
            self.copy_status = COPY_SUCCEEDED
            copied = True

        self._cancel_copy_timer()
        self._copy_timer = self.scheduler(self.copy_status_seconds, self._clear_copy_status)
        return copied

    def close(self) -> None:
        """Cancel any pending timer; call when the form goes away."""
        self._cancel_copy_timer()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _field(self, name: str) -> FieldValue:
        try:
            return self.fields[name]
        except KeyError:
            raise UnknownFieldError(
                name, known_fields=self.variant.field_names, variant=self.variant.name
            ) from None

    def _get_clipboard(self) -> ClipboardService:
        if self.clipboard is None:
            self.clipboard = ClipboardService()
        return self.clipboard

    def _apply_validation(self, reset_output: bool) -> ValidationResult:
        touched = self.touched_fields
        result = self.variant.evaluate(
            self.values,
            DisclosureMode.incremental(touched, show_all=self.full_disclosure),
        )
        self._set_errors(result)

        submittable = self.can_submit
        if self.full_disclosure and submittable and self.variant.reset_disclosure_on_valid:
            self.full_disclosure = False
            self._logger.debug("Form valid again; leaving full disclosure")

        if reset_output:
            self._reset_output_state(submittable, len(touched))
        return result

    def _set_errors(self, result: ValidationResult) -> None:
        # Replaced wholesale on every evaluation
        for name, field in self.fields.items():
            field.set_error(result.errors.get(name), result.codes.get(name))

    def _reset_output_state(self, valid: bool, touched_count: int) -> None:
        if not valid and touched_count > 0:
            self.output = OUTPUT_FIX_INPUT
        elif valid:
            self.output = OUTPUT_PLACEHOLDER
        self.is_json_output = False
        self.payload = None
        self._cancel_copy_timer()
        self.copy_status = ""

    def _cancel_copy_timer(self) -> None:
        if self._copy_timer is not None:
            self._copy_timer.cancel()
            self._copy_timer = None

    def _clear_copy_status(self) -> None:
        self.copy_status = ""
        self._copy_timer = None
        if self.on_update is not None:
            self.on_update()
