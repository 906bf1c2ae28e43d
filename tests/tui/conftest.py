"""Shared fixtures for TUI tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator, List

import pytest

from formjson.lib.clipboard import ClipboardService
from formjson.lib.variants import BASIC_FORM, LOTTERY_FORM
from formjson.tui.models import FormSession


class FakeTimer:
    """Handle returned by FakeScheduler; records cancellation."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler that never fires on its own; tests fire timers explicitly."""

    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def fire_pending(self) -> None:
        for timer in self.pending:
            timer.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def basic_session(
    scheduler: FakeScheduler, memory_clipboard: ClipboardService
) -> Generator[FormSession, None, None]:
    """A basic-form session with an in-memory clipboard and fake timers."""
    session = FormSession(BASIC_FORM, clipboard=memory_clipboard, scheduler=scheduler)
    yield session
    session.close()


@pytest.fixture
def lottery_session(
    scheduler: FakeScheduler, memory_clipboard: ClipboardService
) -> Generator[FormSession, None, None]:
    """A lottery-form session with an in-memory clipboard and fake timers."""
    session = FormSession(LOTTERY_FORM, clipboard=memory_clipboard, scheduler=scheduler)
    yield session
    session.close()


@pytest.fixture
def settings_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a settings file for the lottery variant."""
    path = tmp_path / ".formjson.yaml"
    path.write_text(
        """
formjson:
  variant: lottery
  json_indent: 4
  copy_status_seconds: 3.5
  clipboard: memory
""",
        encoding="utf-8",
    )
    yield path


@pytest.fixture
def fill() -> Callable[[FormSession, dict], None]:
    """Type every value of a snapshot into a session."""

    def _fill(session: FormSession, values: dict) -> None:
        for name, value in values.items():
            session.change(name, value)

    return _fill
