# Area: Shared Tests
"""Tests for ProtocolLogger and logging setup."""

import json
import logging

from pushquiz_client._shared.logging_config import (
    JSONFormatter,
    enable_protocol_mode,
    log_protocol_error,
    ProtocolFilter,
    setup_logging,
)
from pushquiz_client._shared.protocol_logger import ProtocolLogger
from pushquiz_client.errors import InvalidPayloadError


class TestProtocolLogger:
    """Tests for the session event log."""

    def test_records_entries_in_order(self):
        plog = ProtocolLogger(echo=False)
        plog.log_event("WS open")
        plog.log_sent("auth.join")
        plog.log_received("question.show")
        plog.log_raw("garbage")
        assert plog.entries == ["WS open", "> auth.join", "question.show", "garbage"]

    def test_entries_are_bounded(self):
        plog = ProtocolLogger(echo=False, max_entries=3)
        for i in range(5):
            plog.log_event(f"e{i}")
        assert plog.entries == ["e2", "e3", "e4"]

    def test_echo_prints_display_name_and_context(self, capsys):
        plog = ProtocolLogger(echo=True)
        plog.set_room_id("room-9")
        plog.set_question("q7")
        plog.log_received("question.show")
        out = capsys.readouterr().out
        assert "QUESTION" in out
        assert "room-9" in out
        assert "q7" in out

    def test_errors_go_to_stderr(self, capsys):
        plog = ProtocolLogger(echo=True)
        plog.log_error("boom")
        assert "boom" in capsys.readouterr().err


class TestLoggingSetup:
    """Tests for setup_logging and protocol mode."""

    def test_file_handler_writes_json(self, tmp_path):
        log_file = tmp_path / "logs" / "client.log"
        setup_logging(log_file_path=str(log_file))
        logging.getLogger("pushquiz_client.connection").info("hello")
        for handler in logging.getLogger("pushquiz_client").handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["message"] == "hello"
        assert record["logger"] == "pushquiz_client.connection"
        assert record["level"] == "INFO"

    def test_no_file_handler_when_disabled(self):
        setup_logging(log_file_path=None)
        handlers = logging.getLogger("pushquiz_client").handlers
        assert len(handlers) == 1
        assert logging.getLogger("pushquiz_client").propagate is False

    def test_protocol_mode_filters_terminal(self):
        record = logging.LogRecord("pushquiz_client", logging.INFO, __file__, 1, "x", None, None)
        assert ProtocolFilter().filter(record) is True
        enable_protocol_mode()
        assert ProtocolFilter().filter(record) is False

    def test_json_formatter_includes_extra_context(self):
        record = logging.LogRecord("pushquiz_client", logging.WARNING, __file__, 1, "dropped", None, None)
        record.message_type = "score.update"
        data = json.loads(JSONFormatter().format(record))
        assert data["message_type"] == "score.update"

    def test_protocol_error_written_to_file_with_type(self, tmp_path):
        log_file = tmp_path / "client.log"
        setup_logging(log_file_path=str(log_file))
        log_protocol_error(InvalidPayloadError("score.update", {"qid": "q1"}, ["userId: Field required"]))
        for handler in logging.getLogger("pushquiz_client").handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["level"] == "WARNING"
        assert record["message_type"] == "score.update"
        assert record["error_type"] == "InvalidPayloadError"
