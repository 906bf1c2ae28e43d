"""Clipboard service used by the copy action.

Wraps a prompt_toolkit ``Clipboard`` so the TUI and the CLI share one
"copy text" operation. The system clipboard goes through pyperclip, which
fails when no clipboard mechanism is available (headless sessions, missing
xclip/xsel); that failure surfaces as ClipboardError.
"""

from __future__ import annotations

import logging
from typing import Optional

import pyperclip
from prompt_toolkit.clipboard import Clipboard, InMemoryClipboard
from prompt_toolkit.clipboard.pyperclip import PyperclipClipboard

from formjson.lib.errors import ClipboardError, ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "CLIPBOARD_KINDS",
    "ClipboardService",
    "create_clipboard",
]

CLIPBOARD_KINDS = ("system", "memory")


def create_clipboard(kind: str = "system") -> Clipboard:
    """Create a prompt_toolkit clipboard.

    Args:
        kind: "system" for the OS clipboard, "memory" for an in-process one

    Raises:
        ConfigurationError: If kind is not recognized
    """
    if kind == "system":
        return PyperclipClipboard()
    if kind == "memory":
        return InMemoryClipboard()
    raise ConfigurationError(
        f"Unknown clipboard kind '{kind}'",
        setting="clipboard",
        value=kind,
        suggestion=f"Use one of: {', '.join(CLIPBOARD_KINDS)}",
    )


class ClipboardService:
    """Copies text to a clipboard, converting backend failures to ClipboardError."""

    def __init__(self, clipboard: Optional[Clipboard] = None) -> None:
        self.clipboard = clipboard if clipboard is not None else create_clipboard()

    def copy_text(self, text: str) -> None:
        """Copy text to the clipboard.

        Raises:
            ClipboardError: If the clipboard backend rejects the copy
        """
        try:
            self.clipboard.set_text(text)
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardError("Could not copy to clipboard", cause=e) from e
        logger.debug("Copied %d characters to clipboard", len(text))
