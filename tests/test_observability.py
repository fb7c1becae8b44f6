"""Tests for the logging wrapper, logger setup and action trace."""

import logging

import pytest
from playwright.sync_api import Error as PlaywrightError

from stablescout.logger import LOGGER_NAME, configure_logging, safe_log, tag
from stablescout.observability import format_failure, format_result, with_observability
from stablescout.trace import ActionRecord, ActionTrace


class TestWithObservability:
    def test_returns_value(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        assert with_observability("get_text", "Heading", lambda: "Hi", show_result=True) == "Hi"

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0].startswith("ACTION  ▸ get_text → Heading")
        assert 'result  = "Hi"' in messages[1]

    def test_nav_kind(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        with_observability("goto", "https://example.com", lambda: None, kind="NAV")
        assert caplog.records[0].getMessage() == "NAV     ▸ goto → https://example.com"

    def test_reraises_same_error(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        error = ValueError("bad")

        def fail():
            raise error

        with pytest.raises(ValueError) as exc_info:
            with_observability("click", "Buy", fail)

        assert exc_info.value is error
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage() == "FAILED  ▸ click → Buy | Error: bad"

    def test_trace_records(self):
        trace = ActionTrace()

        def fail():
            raise RuntimeError("x")

        with_observability("click", "A", lambda: None, trace=trace)
        with pytest.raises(RuntimeError):
            with_observability("click", "B", fail, trace=trace)

        assert [r.passed for r in trace.records] == [True, False]
        assert trace.records[1].error == "x"


class TestFormatting:
    def test_tag_width(self):
        assert tag("NAV") == "NAV     "
        assert len(tag("ACTION")) == len(tag("FAILED"))

    def test_playwright_message_used(self):
        line = format_failure("click", "Buy", PlaywrightError("Timeout 10000ms exceeded."))
        assert line.endswith("| Error: Timeout 10000ms exceeded.")

    def test_list_result(self):
        assert format_result(["A", "B"]).endswith("result  = [A, B]")


class TestLogger:
    def test_safe_log_swallows_logger_errors(self):
        def broken(message):
            raise OSError("disk full")

        safe_log(broken, "hello")

    def test_configure_logging_idempotent(self):
        log = configure_logging("DEBUG")
        count = len(log.handlers)
        configure_logging("INFO")

        assert len(log.handlers) == count
        assert log.level == logging.INFO


class TestActionTrace:
    def test_summary(self):
        trace = ActionTrace()
        trace.add(ActionRecord("click", "Buy", True, duration_ms=12.5))
        trace.add(ActionRecord("fill", "Email", False, error="nope", duration_ms=7.5))

        assert trace.summary() == {"actions": 2, "passed": 1, "failed": 1, "total_ms": 20.0}
        assert trace.to_dict()["records"][1]["result"] == "FAIL"

    def test_clear(self):
        trace = ActionTrace()
        trace.add(ActionRecord("click", "Buy", True))
        trace.clear()
        assert trace.records == []
