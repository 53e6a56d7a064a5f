# Area: Test Support
"""Shared fixtures: a hand-driven clock/scheduler and an in-memory transport."""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, List, Optional

import pytest

from pushquiz_client.connection import SessionConnection
from pushquiz_client._shared import logging_config
from pushquiz_client._shared.protocol_logger import ProtocolLogger

START_MS = 1_700_000_000_000.0


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now_ms: float = START_MS):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms


class ManualHandle:
    def __init__(self, when_ms: float, seq: int, callback: Callable[[], None]):
        self.when_ms = when_ms
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Runs scheduled callbacks in due order as time is advanced by hand."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._handles: List[ManualHandle] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        self._seq += 1
        handle = ManualHandle(self.clock.now_ms + delay * 1000, self._seq, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.clock.now_ms + seconds * 1000
        while True:
            due = [h for h in self._handles if not h.cancelled and h.when_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when_ms, h.seq))
            self._handles.remove(handle)
            self.clock.now_ms = max(self.clock.now_ms, handle.when_ms)
            handle.callback()
        self.clock.now_ms = target


class FakeTransport:
    """In-memory transport recording what the session sends."""

    def __init__(self, frames: Optional[List[Any]] = None):
        self.sent: List[Dict[str, Any]] = []
        self.close_calls: List[tuple] = []
        self.frames: List[Any] = list(frames or [])

    def send(self, text: str) -> None:
        self.sent.append(json.loads(text))

    def close(self, code: int, reason: str) -> None:
        self.close_calls.append((code, reason))

    @property
    def sent_types(self) -> List[str]:
        return [m["type"] for m in self.sent]

    def sent_of_type(self, message_type: str) -> List[Dict[str, Any]]:
        return [m for m in self.sent if m["type"] == message_type]

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        while self.frames:
            yield self.frames.pop(0)
            await asyncio.sleep(0)


def frame(message_type: str, **payload: Any) -> str:
    """Encode an inbound frame."""
    return json.dumps({"type": message_type, "payload": payload})


def question_frame(
    qid: str = "q1",
    server_ts: float = START_MS,
    time_limit: float = 10,
    options: Optional[List[str]] = None,
    order: int = 1,
    answer_window_id: str = "w1",
) -> str:
    return frame(
        "question.show",
        qid=qid,
        order=order,
        text=f"Question {qid}?",
        options=options if options is not None else ["Red", "Green", "Blue"],
        timeLimitSec=time_limit,
        serverTs=int(server_ts),
        answerWindowId=answer_window_id,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client_config():
    return {
        "room_id": "room-1",
        "user_id": "user-1",
        "timezone": "UTC",
        "log_file": None,
    }


@pytest.fixture
def make_connection(client_config, clock, scheduler, transport):
    """Build a SessionConnection wired to the fakes; connect=True joins it."""

    def _make(connect: bool = True, **overrides: Any) -> SessionConnection:
        config = dict(client_config, **overrides)

        async def factory(url: str):
            factory.urls.append(url)
            return transport

        factory.urls = []
        conn = SessionConnection(
            config,
            transport_factory=factory,
            clock=clock,
            scheduler=scheduler,
            protocol_logger=ProtocolLogger(echo=False),
        )
        conn.factory = factory
        if connect:
            asyncio.run(conn.connect())
        return conn

    return _make


@pytest.fixture
def connection(make_connection):
    return make_connection()


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Each test starts outside protocol mode with no package handlers."""
    monkeypatch.setattr(logging_config, "_protocol_mode_enabled", False)
    yield
    logging.getLogger("pushquiz_client").handlers.clear()
