"""UI-agnostic state management for the TUI.

This module provides testable state classes that can be used without a
terminal. The session tracks field values and touch state, and drives the
validation engine the way the form's event handlers need it.
"""

from formjson.tui.models.field_value import FieldValue
from formjson.tui.models.form_state import FormSession, SessionPhase, start_timer

__all__ = [
    "FieldValue",
    "FormSession",
    "SessionPhase",
    "start_timer",
]
