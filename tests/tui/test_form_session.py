"""Tests for FormSession and FieldValue.

These tests verify the disclosure state machine, the output panel and the
copy status without a terminal.
"""

from __future__ import annotations

import pytest
from prompt_toolkit.clipboard import InMemoryClipboard

from formjson.lib.errors import UnknownFieldError
from formjson.lib.payload import render_json
from formjson.lib.rules import ErrorCode
from formjson.lib.variants import BASIC_FORM, LOTTERY_FORM
from formjson.tui.constants import (
    COPY_FAILED,
    COPY_SUCCEEDED,
    OUTPUT_FIX_INPUT,
    OUTPUT_PLACEHOLDER,
)
from formjson.tui.models import FieldValue, FormSession, SessionPhase, start_timer
from formjson.tui.settings import FormSettings


class TestFieldValue:
    """Tests for FieldValue dataclass."""

    def test_defaults(self) -> None:
        """Field value has correct defaults."""
        field = FieldValue(name="age")

        assert field.value == ""
        assert field.touched is False
        assert field.error is None
        assert field.error_code is None

    def test_set_value_touches(self) -> None:
        """Editing a value marks the field touched."""
        field = FieldValue(name="age")
        field.set_value("30")

        assert field.value == "30"
        assert field.touched is True

    def test_mark_touched_reports_first_touch(self) -> None:
        """mark_touched returns True only the first time."""
        field = FieldValue(name="age")

        assert field.mark_touched() is True
        assert field.mark_touched() is False

    def test_set_error(self) -> None:
        """Errors carry their code; clearing drops both."""
        field = FieldValue(name="age")
        field.set_error("数字のみ入力してください。", ErrorCode.NON_NUMERIC_VALUE)
        assert field.error == "数字のみ入力してください。"
        assert field.error_code == ErrorCode.NON_NUMERIC_VALUE

        field.set_error(None)
        assert field.error is None
        assert field.error_code is None

    def test_set_error_empty_message_clears(self) -> None:
        """An empty message counts as no error."""
        field = FieldValue(name="age")
        field.set_error("", ErrorCode.NON_NUMERIC_VALUE)

        assert field.error is None
        assert field.error_code is None

    def test_reset_touched(self) -> None:
        """reset_touched clears the touch flag but keeps the value."""
        field = FieldValue(name="age")
        field.set_value("30")
        field.reset_touched()

        assert field.touched is False
        assert field.value == "30"


class TestPristineSession:
    """A freshly opened form."""

    def test_no_errors_on_load(self, basic_session: FormSession) -> None:
        """Nothing is shown before the user interacts."""
        assert basic_session.errors == {}
        assert basic_session.touched_fields == {}
        assert basic_session.phase == SessionPhase.PRISTINE

    def test_placeholder_output(self, basic_session: FormSession) -> None:
        """The output panel shows the placeholder and no JSON."""
        assert basic_session.output == OUTPUT_PLACEHOLDER
        assert basic_session.is_json_output is False
        assert basic_session.copy_status == ""

    def test_cannot_submit(self, basic_session: FormSession) -> None:
        """An empty form is not submittable."""
        assert basic_session.can_submit is False

    def test_fields_in_order(self, lottery_session: FormSession) -> None:
        """Session fields follow the variant's declaration order."""
        assert list(lottery_session.values) == LOTTERY_FORM.field_names


class TestIncrementalDisclosure:
    """Errors while the user fills in the form."""

    def test_first_edit_shows_only_that_field(self, basic_session: FormSession) -> None:
        """Only the edited field reports an error."""
        basic_session.change("age", "abc")

        assert basic_session.errors == {"age": "数字のみ入力してください。"}
        assert basic_session.fields["age"].error_code == ErrorCode.NON_NUMERIC_VALUE
        assert basic_session.phase == SessionPhase.INCREMENTAL

    def test_clearing_a_touched_field_is_required_error(self, basic_session: FormSession) -> None:
        """A touched empty field shows its required message."""
        basic_session.change("name", "山田")
        basic_session.change("name", "")

        assert basic_session.errors == {"name": "名前を入力してください。"}

    def test_blur_reveals_required(self, basic_session: FormSession) -> None:
        """Leaving an empty field touches it."""
        basic_session.blur("date")

        assert basic_session.errors == {"date": "日付を入力してください。"}
        assert basic_session.touched_fields == {"date": True}

    def test_invalid_touched_form_asks_for_fixes(self, basic_session: FormSession) -> None:
        """With touched fields and an invalid form the panel asks for fixes."""
        basic_session.change("name", "山田")

        assert basic_session.output == OUTPUT_FIX_INPUT

    def test_valid_form_shows_placeholder(
        self, basic_session: FormSession, basic_values, fill
    ) -> None:
        """Once everything is valid the placeholder returns and submit is enabled."""
        fill(basic_session, basic_values)

        assert basic_session.errors == {}
        assert basic_session.output == OUTPUT_PLACEHOLDER
        assert basic_session.can_submit is True

    def test_fixing_an_error_clears_it(self, basic_session: FormSession) -> None:
        """Errors are replaced on every evaluation."""
        basic_session.change("age", "0")
        basic_session.change("age", "1")

        assert basic_session.errors == {}
        assert basic_session.fields["age"].error is None

    def test_date_order_error_on_second_field(self, basic_session: FormSession) -> None:
        """The ordering error appears on the second date."""
        basic_session.change("date", "2024-02-01")
        basic_session.change("date2", "2024-01-31")

        assert set(basic_session.errors) == {"date2"}
        assert basic_session.fields["date2"].error_code == ErrorCode.DATE_ORDER_VIOLATION

    def test_unknown_field(self, basic_session: FormSession) -> None:
        """Undeclared fields are rejected."""
        with pytest.raises(UnknownFieldError) as exc_info:
            basic_session.change("toDate", "2024-01-01")

        assert exc_info.value.variant == "basic"
        with pytest.raises(UnknownFieldError):
            basic_session.blur("email")


class TestRejectedSubmit:
    """Submitting an invalid form."""

    def test_escalates_to_full_disclosure(self, basic_session: FormSession) -> None:
        """Every error is shown after a rejected submit."""
        result = basic_session.submit()

        assert result.valid is False
        assert set(basic_session.errors) == set(BASIC_FORM.field_names)
        assert basic_session.full_disclosure is True
        assert basic_session.phase == SessionPhase.FULL_DISCLOSURE
        assert basic_session.output == OUTPUT_FIX_INPUT

    def test_untouched_errors_stay_visible(self, basic_session: FormSession) -> None:
        """After escalation, editing one field keeps the others' errors."""
        basic_session.submit()
        basic_session.change("name", "山田")

        assert set(basic_session.errors) == {"age", "bool", "date", "date2"}

    def test_basic_drops_disclosure_when_valid(
        self, basic_session: FormSession, basic_values, fill
    ) -> None:
        """The basic form leaves full disclosure once it is valid again."""
        basic_session.submit()
        fill(basic_session, basic_values)

        assert basic_session.full_disclosure is False
        assert basic_session.phase == SessionPhase.INCREMENTAL

    def test_lottery_keeps_disclosure(
        self, lottery_session: FormSession, lottery_values, fill
    ) -> None:
        """The lottery form keeps full disclosure after becoming valid."""
        lottery_session.submit()
        fill(lottery_session, lottery_values)

        assert lottery_session.errors == {}
        assert lottery_session.full_disclosure is True
        assert lottery_session.phase == SessionPhase.FULL_DISCLOSURE


class TestValidSubmit:
    """Submitting a valid form."""

    def test_basic_output(self, basic_session: FormSession, basic_values, fill) -> None:
        """The output panel holds the two-space-indented payload."""
        fill(basic_session, basic_values)

        result = basic_session.submit()

        assert result.valid is True
        assert basic_session.is_json_output is True
        assert basic_session.phase == SessionPhase.OUTPUT
        assert basic_session.payload == {
            "name": "山田太郎",
            "age": 30,
            "bool": True,
            "date": "2024-01-01",
            "date2": "2024-01-02",
        }
        assert basic_session.output == render_json(basic_session.payload, indent=2)
        assert '"name": "山田太郎"' in basic_session.output

    def test_basic_clears_touched(self, basic_session: FormSession, basic_values, fill) -> None:
        """The basic form starts a new episode after a valid submit."""
        basic_session.submit()
        fill(basic_session, basic_values)
        basic_session.submit()

        assert basic_session.touched_fields == {}
        assert basic_session.full_disclosure is False

    def test_lottery_keeps_touched(
        self, lottery_session: FormSession, lottery_values, fill
    ) -> None:
        """The lottery form keeps its touched set and payload keys."""
        fill(lottery_session, lottery_values)
        lottery_session.submit()

        assert set(lottery_session.touched_fields) == set(LOTTERY_FORM.field_names)
        assert list(lottery_session.payload) == [
            "customer_name",
            "winners",
            "from_date",
            "to_date",
            "pool_size",
            "open",
        ]

    def test_edit_to_invalid_invalidates_output(
        self, basic_session: FormSession, basic_values, fill
    ) -> None:
        """Breaking a field replaces the JSON with the fix-input message."""
        fill(basic_session, basic_values)
        basic_session.submit()

        basic_session.change("age", "0")

        assert basic_session.is_json_output is False
        assert basic_session.output == OUTPUT_FIX_INPUT
        assert basic_session.errors == {"age": "1〜10000の範囲で入力してください。"}
        assert basic_session.payload is None

    def test_edit_to_valid_invalidates_output(
        self, basic_session: FormSession, basic_values, fill
    ) -> None:
        """Any edit drops the JSON, even when the form stays valid."""
        fill(basic_session, basic_values)
        basic_session.submit()

        basic_session.change("age", "31")

        assert basic_session.is_json_output is False
        assert basic_session.output == OUTPUT_PLACEHOLDER

    def test_blur_keeps_output(self, basic_session: FormSession, basic_values, fill) -> None:
        """Moving between fields does not discard the JSON."""
        fill(basic_session, basic_values)
        basic_session.submit()
        output = basic_session.output

        basic_session.blur("name")

        assert basic_session.is_json_output is True
        assert basic_session.output == output

    def test_indent_setting(self, scheduler, memory_clipboard, basic_values, fill) -> None:
        """The session renders with its configured indent."""
        session = FormSession(
            BASIC_FORM, clipboard=memory_clipboard, scheduler=scheduler, json_indent=4
        )
        fill(session, basic_values)
        session.submit()

        assert '\n    "name": "山田太郎"' in session.output


class TestCopyOutput:
    """Copying the generated JSON."""

    def test_nothing_to_copy(self, basic_session: FormSession, scheduler) -> None:
        """Without JSON output copying is a no-op."""
        assert basic_session.copy_output() is False
        assert basic_session.copy_status == ""
        assert scheduler.timers == []

    def test_copy_success(
        self, basic_session: FormSession, basic_values, fill, scheduler, memory_clipboard
    ) -> None:
        """A successful copy shows a status that clears after two seconds."""
        fill(basic_session, basic_values)
        basic_session.submit()

        assert basic_session.copy_output() is True

        assert basic_session.copy_status == COPY_SUCCEEDED
        assert memory_clipboard.clipboard.get_data().text == basic_session.output
        assert [timer.delay for timer in scheduler.pending] == [2.0]

        scheduler.fire_pending()
        assert basic_session.copy_status == ""

    def test_copy_failure(self, scheduler, failing_clipboard, basic_values, fill) -> None:
        """A failed copy shows the failure status."""
        session = FormSession(BASIC_FORM, clipboard=failing_clipboard, scheduler=scheduler)
        fill(session, basic_values)
        session.submit()

        assert session.copy_output() is False

        assert session.copy_status == COPY_FAILED
        assert len(scheduler.pending) == 1

    def test_second_copy_replaces_timer(
        self, basic_session: FormSession, basic_values, fill, scheduler
    ) -> None:
        """Only the latest clear timer stays scheduled."""
        fill(basic_session, basic_values)
        basic_session.submit()

        basic_session.copy_output()
        first = scheduler.pending[0]
        basic_session.copy_output()

        assert first.cancelled is True
        assert len(scheduler.pending) == 1

    def test_edit_clears_status(
        self, basic_session: FormSession, basic_values, fill, scheduler
    ) -> None:
        """Editing after a copy clears the status and its timer."""
        fill(basic_session, basic_values)
        basic_session.submit()
        basic_session.copy_output()

        basic_session.change("name", "佐藤")

        assert basic_session.copy_status == ""
        assert scheduler.pending == []

    def test_on_update_called_when_cleared(
        self, scheduler, memory_clipboard, basic_values, fill
    ) -> None:
        """The listener is told when the status clears itself."""
        updates = []
        session = FormSession(
            BASIC_FORM,
            clipboard=memory_clipboard,
            scheduler=scheduler,
            on_update=lambda: updates.append(session.copy_status),
        )
        fill(session, basic_values)
        session.submit()
        session.copy_output()

        scheduler.fire_pending()

        assert updates == [""]

    def test_close_cancels_timer(
        self, basic_session: FormSession, basic_values, fill, scheduler
    ) -> None:
        """Closing the session cancels the pending timer."""
        fill(basic_session, basic_values)
        basic_session.submit()
        basic_session.copy_output()

        basic_session.close()

        assert scheduler.pending == []


class TestSessionConstruction:
    """Building sessions from settings and the default scheduler."""

    def test_from_settings(self, scheduler) -> None:
        """Settings choose the variant, indent, timer and clipboard."""
        settings = FormSettings(
            variant="lottery", json_indent=4, copy_status_seconds=3.5, clipboard="memory"
        )

        session = FormSession.from_settings(settings, scheduler=scheduler)

        assert session.variant is LOTTERY_FORM
        assert session.json_indent == 4
        assert session.copy_status_seconds == 3.5
        assert isinstance(session.clipboard.clipboard, InMemoryClipboard)

    def test_variant_override(self) -> None:
        """An explicit variant name wins over the settings."""
        settings = FormSettings(variant="lottery", clipboard="memory")
        assert FormSession.from_settings(settings, "basic").variant is BASIC_FORM

    def test_start_timer(self) -> None:
        """The default scheduler starts a cancellable daemon timer."""
        calls = []
        timer = start_timer(60.0, lambda: calls.append(1))
        try:
            assert timer.daemon is True
            assert timer.is_alive()
        finally:
            timer.cancel()
        assert calls == []
