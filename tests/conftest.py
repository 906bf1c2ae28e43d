"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from typing import Dict, Generator

import pyperclip
import pytest
from prompt_toolkit.clipboard import Clipboard, ClipboardData, InMemoryClipboard

from formjson.lib.clipboard import ClipboardService
from formjson.lib.variants import BASIC_FORM, LOTTERY_FORM
from formjson.tui import settings as settings_module


@pytest.fixture
def basic_values() -> Dict[str, str]:
    """A snapshot of the basic form that passes every rule."""
    return {
        "name": "山田太郎",
        "age": "30",
        "bool": "true",
        "date": "2024-01-01",
        "date2": "2024-01-02",
    }


@pytest.fixture
def lottery_values() -> Dict[str, str]:
    """A snapshot of the lottery form that passes every rule."""
    return {
        "name": "株式会社サンプル",
        "winners": "10",
        "fromDate": "2024-04-01",
        "toDate": "2024-04-30",
        "poolSize": "500",
        "open": "false",
    }


@pytest.fixture
def basic_form():
    return BASIC_FORM


@pytest.fixture
def lottery_form():
    return LOTTERY_FORM


@pytest.fixture(autouse=True)
def reset_global_settings() -> Generator[None, None, None]:
    """Keep the cached settings from leaking between tests."""
    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


class FailingClipboard(Clipboard):
    """Clipboard whose backend is unavailable, like pyperclip on a headless box."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or pyperclip.PyperclipException("could not find a copy/paste mechanism")
        self.attempts = 0

    def set_data(self, data: ClipboardData) -> None:
        self.attempts += 1
        raise self.exc

    def get_data(self) -> ClipboardData:
        return ClipboardData()


@pytest.fixture
def failing_backend():
    """Factory for clipboard backends that raise on every copy."""
    return FailingClipboard


@pytest.fixture
def memory_clipboard() -> ClipboardService:
    """Clipboard service backed by an in-process clipboard."""
    return ClipboardService(InMemoryClipboard())


@pytest.fixture
def failing_clipboard() -> ClipboardService:
    """Clipboard service whose every copy fails."""
    return ClipboardService(FailingClipboard())
