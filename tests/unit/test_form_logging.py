"""Tests for formjson/lib/logging.py - JSON formatter and context logger."""

from __future__ import annotations

import io
import json
import logging
import sys
from pathlib import Path

from formjson.lib.logging import FormLogger, JSONFormatter, get_form_logger, setup_logging


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("formjson.test", logging.INFO, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_standard_fields(self):
        """Records render as JSON with level, logger and message."""
        data = json.loads(JSONFormatter().format(_record("送信しました")))
        assert data["level"] == "INFO"
        assert data["logger"] == "formjson.test"
        assert data["message"] == "送信しました"

    def test_keeps_non_ascii(self):
        """Japanese text is not escaped."""
        assert "送信" in JSONFormatter().format(_record("送信"))

    def test_extra_fields(self):
        """Attributes passed through extra= are grouped under 'extra'."""
        data = json.loads(JSONFormatter().format(_record(variant="lottery")))
        assert data["extra"] == {"variant": "lottery"}

    def test_exception_info(self):
        """Exception details are included."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "formjson.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestFormLogger:
    """Tests for FormLogger context handling."""

    def test_context_attached(self, caplog):
        """Context fields are attached to every record."""
        logger = FormLogger("formjson.test.context")
        logger.set_context(variant="basic")

        with caplog.at_level(logging.INFO, logger="formjson.test.context"):
            logger.info("Form submitted")

        assert caplog.records[-1].variant == "basic"

    def test_context_accumulates(self, caplog):
        """Later set_context calls add to and override earlier fields."""
        logger = get_form_logger("formjson.test.accumulate")
        logger.set_context(variant="basic", phase="pristine")
        logger.set_context(phase="output")

        with caplog.at_level(logging.INFO, logger="formjson.test.accumulate"):
            logger.info("JSON generated")

        record = caplog.records[-1]
        assert record.variant == "basic"
        assert record.phase == "output"

    def test_call_extra_merged(self, caplog):
        """Per-call extra values are merged with the context."""
        logger = FormLogger("formjson.test.extra")
        logger.set_context(variant="lottery")

        with caplog.at_level(logging.WARNING, logger="formjson.test.extra"):
            logger.warning("Copy failed", extra={"cause": "no display"})

        record = caplog.records[-1]
        assert record.cause == "no display"
        assert record.variant == "lottery"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_text_format(self, restore_logging):
        """Plain text logs go to the given stream."""
        stream = io.StringIO()
        setup_logging(stream=stream)

        logging.getLogger("formjson.test.setup").info("ready")

        assert "[INFO] formjson.test.setup: ready" in stream.getvalue()

    def test_verbose_enables_debug(self, restore_logging):
        """verbose=True lowers the level to DEBUG."""
        setup_logging(verbose=True, stream=io.StringIO())
        assert logging.getLogger().level == logging.DEBUG

    def test_json_format_and_file(self, restore_logging, tmp_path: Path):
        """JSON logs are written to the console and the log file."""
        stream = io.StringIO()
        log_file = tmp_path / "formjson.log"
        setup_logging(json_format=True, log_file=str(log_file), stream=stream)

        logging.getLogger("formjson.test.json").info("converted")
        for handler in logging.getLogger().handlers:
            handler.flush()

        console = json.loads(stream.getvalue().strip())
        assert console["message"] == "converted"
        assert json.loads(log_file.read_text(encoding="utf-8").strip())["message"] == "converted"

    def test_replaces_handlers(self, restore_logging):
        """Calling setup twice does not duplicate handlers."""
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        assert len(logging.getLogger().handlers) == 1
