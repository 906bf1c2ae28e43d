"""Field value with touch tracking for incremental error disclosure."""

from __future__ import annotations

from dataclasses import dataclass

from formjson.lib.rules import ErrorCode


@dataclass
class FieldValue:
    """Represents a single form field's raw value and display state.

    Attributes:
        name: The field name (e.g., "name", "fromDate")
        value: The raw string as typed or selected
        touched: Whether the user has changed or left this field
        error: Message currently shown next to the field, if any
        error_code: Kind of the current error, if any
    """

    name: str
    value: str = ""
    touched: bool = False
    error: str | None = None
    error_code: ErrorCode | None = None

    def set_value(self, value: str) -> None:
        """Store an edited value; editing always counts as touching."""
        self.value = value
        self.touched = True

    def mark_touched(self) -> bool:
        """Mark the field as touched.

        Returns:
            True if the field was not touched before
        """
        if self.touched:
            return False
        self.touched = True
        return True

    def set_error(self, message: str | None, code: ErrorCode | None = None) -> None:
        self.error = message or None
        self.error_code = code if message else None

    def reset_touched(self) -> None:
        self.touched = False

