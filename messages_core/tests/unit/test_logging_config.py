"""Unit tests for logging configuration helpers."""

import json
import logging

import pytest

from messages_core.config.settings import AppSettings, LoggingSettings
from messages_core.infra.logging.config import (
    ColoredFormatter,
    ContextFilter,
    JSONFormatter,
    LogContext,
    context_operation,
    context_thread_id,
    setup_logging,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("messages_core.test", logging.INFO, __file__, 1, msg, None, None)


class TestLogContext:
    def test_sets_and_resets(self) -> None:
        with LogContext(thread_id=42, operation="shortcut.upsert"):
            assert context_thread_id.get() == 42
            assert context_operation.get() == "shortcut.upsert"
        assert context_thread_id.get() is None
        assert context_operation.get() is None

    def test_nested(self) -> None:
        with LogContext(operation="outer"):
            with LogContext(thread_id=1, operation="inner"):
                assert context_operation.get() == "inner"
            assert context_operation.get() == "outer"
            assert context_thread_id.get() is None


class TestFormatters:
    def test_json_includes_context_and_extra(self) -> None:
        record = _record()
        record.extra_data = {"count": 3}
        with LogContext(thread_id=7, operation="keywords.export"):
            ContextFilter().filter(record)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["thread_id"] == 7
        assert data["operation"] == "keywords.export"
        assert data["count"] == 3

    def test_json_without_context(self) -> None:
        record = _record()
        ContextFilter().filter(record)
        data = json.loads(JSONFormatter().format(record))
        assert "thread_id" not in data

    def test_colored_formatter_leaves_record_untouched(self) -> None:
        record = _record()
        with LogContext(thread_id=3):
            ContextFilter().filter(record)

        output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "[thread=3] hello" in output
        assert record.levelname == "INFO"
        assert record.msg == "hello"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_configured_level(self, restore_root_logger: logging.Logger) -> None:
        setup_logging(LoggingSettings(level="WARNING"), AppSettings(debug=False))
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1

    def test_debug_mode_forces_debug_level(self, restore_root_logger: logging.Logger) -> None:
        setup_logging(LoggingSettings(level="WARNING"), AppSettings(debug=True))
        assert restore_root_logger.level == logging.DEBUG
        assert restore_root_logger.handlers[0].level == logging.DEBUG

    def test_file_handler_writes_json(self, restore_root_logger: logging.Logger, tmp_path) -> None:
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(
            LoggingSettings(level="INFO", log_file=log_file),
            AppSettings(environment="testing"),
        )
        for handler in restore_root_logger.handlers:
            handler.flush()

        first = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert first["message"] == "Logging configured"
        assert first["environment"] == "testing"
