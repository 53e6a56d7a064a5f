# Area: Runner Tests
"""Tests for PlayerRunner command handling and rendering."""

import io
from unittest.mock import MagicMock

import pytest

from pushquiz_client.connection import SessionConnection
from pushquiz_client.runner import PlayerRunner
from pushquiz_client._session.enums import CloseState, SubmitStatus


@pytest.fixture
def fake_connection():
    conn = MagicMock(spec=SessionConnection)
    conn.is_host = False
    return conn


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def runner(fake_connection, output):
    r = PlayerRunner(
        config={"room_id": "R1", "user_id": "U1", "log_file": None},
        connection=fake_connection,
        output_stream=output,
    )
    return r


def question_snapshot(qid="q1", time_up=False, accepted=False, last_score=None):
    return {
        "question": {
            "qid": qid, "order": 2, "text": "Largest planet?",
            "options": ["Mars", "Jupiter"], "time_limit_seconds": 10,
        },
        "time_up": time_up,
        "accepted": accepted,
        "last_score": last_score,
    }


class TestHandleCommand:
    """Tests for command parsing."""

    def test_number_submits_zero_based_option(self, runner, fake_connection, output):
        fake_connection.submit_answer.return_value = SubmitStatus.AWAITING_SERVER
        runner.handle_command("2\n")
        fake_connection.submit_answer.assert_called_once_with(1)
        assert "…sending" in output.getvalue()

    def test_rejected_answer_reports_status(self, runner, fake_connection, output):
        fake_connection.submit_answer.return_value = SubmitStatus.ALREADY_ANSWERED
        runner.handle_command("1")
        assert "Already answered" in output.getvalue()

    @pytest.mark.parametrize("command", ["q", "quit", "EXIT"])
    def test_quit_requests_close(self, runner, fake_connection, command):
        fake_connection.request_close.return_value = CloseState.CLOSED
        runner.handle_command(command)
        fake_connection.request_close.assert_called_once()

    def test_quit_while_waiting_for_score(self, runner, fake_connection, output):
        fake_connection.request_close.return_value = CloseState.CLOSE_REQUESTED
        runner.handle_command("quit")
        assert "waiting for score" in output.getvalue()

    def test_start_sends_host_start(self, runner, fake_connection):
        fake_connection.send_host_start.return_value = True
        runner.handle_command("start")
        fake_connection.send_host_start.assert_called_once()

    def test_start_as_non_host(self, runner, fake_connection, output):
        fake_connection.send_host_start.return_value = False
        runner.handle_command("start")
        assert "Only the host" in output.getvalue()

    def test_blank_line_ignored(self, runner, fake_connection):
        runner.handle_command("   ")
        fake_connection.submit_answer.assert_not_called()
        fake_connection.request_close.assert_not_called()

    def test_unknown_command_prints_help(self, runner, output):
        runner.handle_command("dance")
        assert "Commands:" in output.getvalue()


class TestRender:
    """Tests for snapshot rendering."""

    def test_new_question_printed_once(self, runner, output):
        runner._render(question_snapshot())
        runner._render(question_snapshot())
        text = output.getvalue()
        assert text.count("Q2. Largest planet?") == 1
        assert "  2) Jupiter" in text

    def test_time_up_and_reveal(self, runner, output):
        runner._render(question_snapshot())
        runner._render(question_snapshot(time_up=True))
        runner._render({"question": None})
        text = output.getvalue()
        assert "Time up" in text
        assert "Answers revealed." in text

    def test_accepted_and_score(self, runner, output):
        runner._render(question_snapshot())
        runner._render(question_snapshot(accepted=True,
                                         last_score={"qid": "q1", "delta": 100, "total": 250}))
        text = output.getvalue()
        assert "Answer accepted" in text
        assert "Score: +100 (total 250)" in text

    def test_registers_as_observer(self, runner, fake_connection):
        fake_connection.add_observer.assert_called_once_with(runner._render)
