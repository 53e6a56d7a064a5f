# Area: Shared
"""
pushquiz_client._shared.protocol_logger — Protocol event log
=============================================================

Records every protocol event of a session (transport open/close,
messages sent and received, undecodable frames) as a short line.
Lines are kept in a bounded in-memory list for observers and, when
echo is on, printed in color to the terminal.
"""

from __future__ import annotations
import sys
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Protocol messages
ORANGE = "\033[38;5;208m"  # Session events
RED = "\033[31m"           # Errors
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# MESSAGE TYPE → DISPLAY NAME MAPPINGS
# ══════════════════════════════════════════════════════════════

DISPLAY_NAMES = {
    "auth.join": "JOIN",
    "host.start": "START-MATCH",
    "answer.submit": "ANSWER",
    "question.show": "QUESTION",
    "answer.received": "ANSWER-ACK",
    "score.update": "SCORE",
    "question.reveal": "REVEAL",
}

DEFAULT_MAX_ENTRIES = 500


class ProtocolLogger:
    """Event log for one participant session."""

    def __init__(self, echo: bool = True, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.echo = echo
        self._entries: Deque[str] = deque(maxlen=max_entries)
        self._room_id: str = "-"
        self._qid: Optional[str] = None

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def set_room_id(self, room_id: str) -> None:
        """Set current room for logging context."""
        self._room_id = room_id or "-"

    def set_question(self, qid: Optional[str]) -> None:
        """Set current question for logging context (None after reveal)."""
        self._qid = qid

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _context(self) -> str:
        return f"ROOM: {self._room_id:12} | Q: {self._qid or '-':12}"

    def _emit(self, entry: str, line: str, stream=None) -> None:
        self._entries.append(entry)
        if self.echo:
            print(line, file=stream or sys.stdout)

    def log_received(self, message_type: str) -> None:
        """Log a received protocol message."""
        display = DISPLAY_NAMES.get(message_type, message_type)
        self._emit(
            message_type,
            f"{GREEN}{self._now()} | {self._context()} | RECEIVED | {display}{RESET}",
        )

    def log_sent(self, message_type: str) -> None:
        """Log a sent protocol message."""
        display = DISPLAY_NAMES.get(message_type, message_type)
        self._emit(
            f"> {message_type}",
            f"{GREEN}{self._now()} | {self._context()} | SENT     | {display}{RESET}",
        )

    def log_event(self, description: str) -> None:
        """Log a session event (transport open/close, close deferral)."""
        self._emit(
            description,
            f"{ORANGE}{self._now()} | {self._context()} | EVENT    | {description}{RESET}",
        )

    def log_raw(self, raw: str) -> None:
        """Log an undecodable frame verbatim."""
        self._emit(
            raw,
            f"{RED}{self._now()} | {self._context()} | RAW      | {raw}{RESET}",
            stream=sys.stderr,
        )

    def log_error(self, description: str) -> None:
        """Log an error."""
        self._emit(
            f"[ERROR] {description}",
            f"{RED}[ERROR] {self._now()} | {description}{RESET}",
            stream=sys.stderr,
        )
