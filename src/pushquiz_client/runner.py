# Area: Runner
"""
pushquiz_client.runner — Interactive terminal participant
=========================================================

Connects to a room, prints questions as they arrive and reads commands
from stdin while the session runs:

    1..N    answer with option N
    start   start the match (host only)
    quit    disconnect (waits for a pending score first)

The runner exits when the session closes. It does not reconnect.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import Any, Dict, Optional, TextIO

from ._runner_config import validate_config, with_defaults
from ._session.enums import CloseState, SubmitStatus
from ._shared.logging_config import enable_protocol_mode, setup_logging
from .connection import SessionConnection
from .types import SessionSnapshot

logger = logging.getLogger("pushquiz_client")

QUIT_COMMANDS = {"q", "quit", "exit"}

STATUS_MESSAGES = {
    SubmitStatus.AWAITING_SERVER: "…sending",
    SubmitStatus.ALREADY_ANSWERED: "Already answered",
    SubmitStatus.NO_ACTIVE_QUESTION: "No question open",
    SubmitStatus.TIME_UP: "Time up",
    SubmitStatus.NOT_CONNECTED: "Not connected",
    SubmitStatus.INVALID_OPTION: "No such option",
}


class PlayerRunner:
    """Runs one participant session in the terminal."""

    def __init__(
        self,
        config: Dict[str, Any],
        connection: Optional[SessionConnection] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        verbose: bool = False,
    ):
        self.config = with_defaults(config)
        validate_config(self.config)

        setup_logging(
            log_file_path=self.config.get("log_file"),
            level=logging.DEBUG if verbose else logging.INFO,
        )
        if not verbose:
            enable_protocol_mode()

        self.connection = connection or SessionConnection(self.config)
        self.connection.add_observer(self._render)
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self._last: SessionSnapshot = {}

    def run(self) -> None:
        """Connect and run until the session closes. Blocks."""
        try:
            asyncio.run(self.run_async())
        except KeyboardInterrupt:
            logger.info("Interrupted")

    async def run_async(self) -> None:
        self._log_startup()
        await self.connection.connect()
        if self.connection.is_host:
            self._print("You are host: type 'start' to start the match.")

        lines: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
        self._start_reader(lines)
        commands = asyncio.create_task(self._process_commands(lines))
        try:
            await self.connection.run()
        finally:
            commands.cancel()
        logger.info("Session closed.")

    # ── Commands ─────────────────────────────────────────────

    def handle_command(self, command: str) -> None:
        """Apply one command line to the session."""
        command = command.strip().lower()
        if not command:
            return

        if command in QUIT_COMMANDS:
            state = self.connection.request_close()
            if state == CloseState.CLOSE_REQUESTED:
                self._print("waiting for score…")
        elif command == "start":
            if not self.connection.send_host_start():
                self._print("Only the host can start the match.")
        elif command.isdigit():
            status = self.connection.submit_answer(int(command) - 1)
            self._print(STATUS_MESSAGES[status])
        else:
            self._print("Commands: 1..N = answer, start = start match, quit = disconnect")

    async def _process_commands(self, lines: "asyncio.Queue[Optional[str]]") -> None:
        while True:
            line = await lines.get()
            if line is None:
                self.connection.request_close()
                return
            self.handle_command(line)

    def _start_reader(self, lines: "asyncio.Queue[Optional[str]]") -> None:
        """Read stdin on a daemon thread so a blocked read never holds up exit."""
        loop = asyncio.get_running_loop()

        def read() -> None:
            for line in self._input:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            loop.call_soon_threadsafe(lines.put_nowait, None)

        threading.Thread(target=read, name="pushquiz-stdin", daemon=True).start()

    # ── Rendering ────────────────────────────────────────────

    def _render(self, snapshot: SessionSnapshot) -> None:
        last, self._last = self._last, snapshot
        question = snapshot.get("question")
        last_question = last.get("question")

        if question and (not last_question or last_question["qid"] != question["qid"]):
            self._print("")
            self._print(f"Q{question['order']}. {question['text']}  "
                        f"({question['time_limit_seconds']:g}s)")
            for i, option in enumerate(question["options"], start=1):
                self._print(f"  {i}) {option}")
        elif last_question and not question:
            self._print("Answers revealed.")

        if question and snapshot.get("time_up") and not last.get("time_up"):
            self._print("Time up")
        if snapshot.get("accepted") and not last.get("accepted"):
            self._print("Answer accepted")
        score = snapshot.get("last_score")
        if score and score != last.get("last_score"):
            self._print(f"Score: {score['delta']:+g} (total {score['total']})")

    def _print(self, text: str) -> None:
        print(text, file=self._output)

    def _log_startup(self) -> None:
        logger.info("=" * 60)
        logger.info("  PushQuiz Client — Starting")
        logger.info(f"  Server: {self.config['server_url']}")
        logger.info(f"  Room:   {self.config['room_id']}")
        logger.info(f"  User:   {self.config['user_id']}")
        logger.info(f"  Host:   {'yes' if self.connection.is_host else 'no'}")
        logger.info("=" * 60)
