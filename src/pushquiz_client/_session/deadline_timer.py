# Area: Session
"""
pushquiz_client._session.deadline_timer — Server-synchronized countdown
=======================================================================

Turns a server-issued timestamp and a time limit into a countdown that
observers can poll. The deadline is fixed when the question starts
(``serverTs + timeLimitSec * 1000``), so network latency between the
server sending a question and the client receiving it is taken out of
the remaining time instead of being added to it.

While running, the timer recomputes the remaining time on a short
cadence (0.1 s by default). It halts by itself at zero; clearing the
question is left to the reveal event.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from .._shared.protocol import current_timestamp_ms
from .scheduling import Clock, Scheduler, TimerHandle

logger = logging.getLogger("pushquiz_client.deadline_timer")

DEFAULT_TICK_INTERVAL_SECONDS = 0.1

TickListener = Callable[[Optional[int], float], None]


class DeadlineTimer:
    """
    Countdown towards a fixed server-derived deadline.

    ``remaining_seconds`` is None while stopped, never negative, and never
    increases while the timer runs.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        clock: Clock = current_timestamp_ms,
        tick_interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
        on_tick: Optional[TickListener] = None,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self._scheduler = scheduler
        self._clock = clock
        self._tick_interval = tick_interval
        self._on_tick = on_tick
        self._handle: Optional[TimerHandle] = None
        self._deadline_ms: Optional[float] = None
        self._total_ms: float = 0.0
        self._remaining_ms: Optional[float] = None
        self._running = False

    # ── Accessors ────────────────────────────────────────────

    @property
    def deadline_ms(self) -> Optional[float]:
        return self._deadline_ms

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_expired(self) -> bool:
        """True once a started countdown has reached zero (until stop/start)."""
        return self._remaining_ms is not None and self._remaining_ms <= 0

    def deadline_passed(self) -> bool:
        """True if the deadline is behind the clock now, even between ticks."""
        if self.is_expired:
            return True
        return self._deadline_ms is not None and self._clock() >= self._deadline_ms

    @property
    def remaining_ms(self) -> Optional[float]:
        return self._remaining_ms

    @property
    def remaining_seconds(self) -> Optional[int]:
        if self._remaining_ms is None:
            return None
        return math.ceil(self._remaining_ms / 1000)

    @property
    def elapsed_fraction(self) -> float:
        if self._remaining_ms is None:
            return 0.0
        if self._total_ms <= 0:
            return 1.0
        return min(1.0, (self._total_ms - self._remaining_ms) / self._total_ms)

    # ── Control ──────────────────────────────────────────────

    def start(self, server_issued_at_ms: float, time_limit_seconds: float) -> None:
        """Fix a new deadline and start ticking, replacing any running countdown."""
        self._cancel_handle()
        self._total_ms = time_limit_seconds * 1000
        self._deadline_ms = server_issued_at_ms + self._total_ms
        self._remaining_ms = None
        self._running = True
        logger.debug(
            "Deadline set: %.0f (limit %.1fs, %.0fms from now)",
            self._deadline_ms, time_limit_seconds, self._deadline_ms - self._clock(),
        )
        self.tick()

    def stop(self) -> None:
        """Cancel updates and clear the displayed remaining time."""
        self._cancel_handle()
        was_active = self._running or self._remaining_ms is not None
        self._running = False
        self._deadline_ms = None
        self._total_ms = 0.0
        self._remaining_ms = None
        if was_active:
            logger.debug("Deadline timer stopped")
            self._notify()

    def tick(self) -> None:
        """Recompute the remaining time and schedule the next tick."""
        self._cancel_handle()
        if not self._running or self._deadline_ms is None:
            return

        left_ms = max(0.0, self._deadline_ms - self._clock())
        if self._remaining_ms is not None:
            # A wall clock stepping backwards must not raise the countdown.
            left_ms = min(left_ms, self._remaining_ms)
        self._remaining_ms = left_ms

        if left_ms <= 0:
            self._running = False
            logger.info("Time up")
        else:
            self._handle = self._scheduler.call_later(self._tick_interval, self.tick)

        self._notify()

    # ── Internals ────────────────────────────────────────────

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _notify(self) -> None:
        if self._on_tick is None:
            return
        try:
            self._on_tick(self.remaining_seconds, self.elapsed_fraction)
        except Exception as e:
            logger.error(f"Tick listener failed: {e}", exc_info=True)
