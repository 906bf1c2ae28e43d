"""Tests for formjson/lib/clipboard.py - the clipboard service."""

import pyperclip
import pytest
from prompt_toolkit.clipboard import InMemoryClipboard
from prompt_toolkit.clipboard.pyperclip import PyperclipClipboard

from formjson.lib.clipboard import CLIPBOARD_KINDS, ClipboardService, create_clipboard
from formjson.lib.errors import ClipboardError, ConfigurationError


class TestCreateClipboard:
    """Tests for create_clipboard."""

    def test_kinds(self):
        """System and memory clipboards are available."""
        assert CLIPBOARD_KINDS == ("system", "memory")
        assert isinstance(create_clipboard("system"), PyperclipClipboard)
        assert isinstance(create_clipboard("memory"), InMemoryClipboard)

    def test_unknown_kind(self):
        """Unknown kinds are a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            create_clipboard("x11")

        assert exc_info.value.setting == "clipboard"


class TestClipboardService:
    """Tests for ClipboardService."""

    def test_copy_text(self, memory_clipboard):
        """Copied text can be read back."""
        memory_clipboard.copy_text('{"name": "山田"}')
        assert memory_clipboard.clipboard.get_data().text == '{"name": "山田"}'

    def test_last_copy_wins(self, memory_clipboard):
        """A second copy replaces the first."""
        memory_clipboard.copy_text("first")
        memory_clipboard.copy_text("second")
        assert memory_clipboard.clipboard.get_data().text == "second"

    def test_backend_failure(self, failing_backend):
        """pyperclip failures surface as ClipboardError."""
        backend = failing_backend()
        service = ClipboardService(backend)

        with pytest.raises(ClipboardError) as exc_info:
            service.copy_text("text")

        assert isinstance(exc_info.value.cause, pyperclip.PyperclipException)
        assert backend.attempts == 1

    def test_os_error(self, failing_backend):
        """OS-level failures surface as ClipboardError too."""
        service = ClipboardService(failing_backend(OSError("xclip not found")))

        with pytest.raises(ClipboardError) as exc_info:
            service.copy_text("text")

        assert exc_info.value.details["cause_type"] == "OSError"

    def test_default_is_system(self):
        """Without an explicit clipboard the system clipboard is used."""
        assert isinstance(ClipboardService().clipboard, PyperclipClipboard)
