# Area: Session
"""
pushquiz_client._session.scheduling — Timer scheduling seam
===========================================================

All waiting in the session is expressed as scheduled callbacks on the
event loop. Components receive a scheduler with a single
``call_later(delay_seconds, callback)`` method returning a handle that
can be cancelled, so tests can drive time by hand.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

Clock = Callable[[], float]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopScheduler:
    """Scheduler backed by an asyncio event loop (the running one by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
