"""prompt_toolkit TUI for the form converter.

This package provides a Terminal User Interface for filling in a form
variant with incremental validation and generating its JSON payload.

Usage:
    python -m formjson.tui                    # Default variant
    python -m formjson.tui --variant lottery  # Lottery form
"""

from __future__ import annotations

__all__ = [
    "FormConverterApp",
    "run_form",
]


def __getattr__(name: str):
    """Lazy import of TUI components."""
    if name == "FormConverterApp":
        from formjson.tui.app import FormConverterApp
        return FormConverterApp
    if name == "run_form":
        from formjson.tui.app import run_form
        return run_form
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
