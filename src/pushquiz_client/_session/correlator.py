# Area: Session
"""
pushquiz_client._session.correlator — Answer/score correlation
==============================================================

Tracks the single answer submission that is waiting for its
``score.update``. The correlation is cleared by a matching score, by a
grace-period timeout, or when the question ends (reveal, new question,
disconnect). Listeners are told why it was cleared; the close
coordinator uses this to release a deferred disconnect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .._shared.protocol import current_timestamp_ms
from .deadline_timer import DeadlineTimer
from .enums import ResolutionReason, SubmitStatus
from .scheduling import Clock, Scheduler, TimerHandle
from .state import ActiveQuestion

logger = logging.getLogger("pushquiz_client.correlator")

DEFAULT_GRACE_PERIOD_SECONDS = 4.0


@dataclass
class PendingCorrelation:
    """An answer that has been sent and not yet scored."""
    question_id: str
    user_id: str
    created_at_ms: float
    timeout_handle: Optional[TimerHandle] = field(default=None, repr=False, compare=False)


ResolutionListener = Callable[[ResolutionReason, PendingCorrelation], None]


class AnswerCorrelator:
    """
    Holds at most one PendingCorrelation.

    Submission is refused when there is no open question, when the
    question was already answered, or when its countdown has hit zero.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        timer: DeadlineTimer,
        clock: Clock = current_timestamp_ms,
        grace_period_seconds: float = DEFAULT_GRACE_PERIOD_SECONDS,
    ) -> None:
        if grace_period_seconds <= 0:
            raise ValueError("grace_period_seconds must be positive")
        self._scheduler = scheduler
        self._timer = timer
        self._clock = clock
        self.grace_period_seconds = grace_period_seconds
        self._pending: Optional[PendingCorrelation] = None
        self._answered_qid: Optional[str] = None
        self._listeners: List[ResolutionListener] = []

    @property
    def pending(self) -> Optional[PendingCorrelation]:
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def awaiting_qid(self) -> Optional[str]:
        return self._pending.question_id if self._pending else None

    def add_listener(self, listener: ResolutionListener) -> None:
        self._listeners.append(listener)

    # ── Submission ───────────────────────────────────────────

    def check_submit(self, question: Optional[ActiveQuestion]) -> SubmitStatus:
        """Return the status a submission for ``question`` would get, without side effects."""
        if question is None:
            return SubmitStatus.NO_ACTIVE_QUESTION
        if self._answered_qid == question.question_id:
            return SubmitStatus.ALREADY_ANSWERED
        if self._pending is not None and self._pending.question_id == question.question_id:
            return SubmitStatus.ALREADY_ANSWERED
        if self._timer.deadline_passed():
            return SubmitStatus.TIME_UP
        return SubmitStatus.AWAITING_SERVER

    def submit(self, question: Optional[ActiveQuestion], user_id: str) -> SubmitStatus:
        """
        Register an answer for ``question`` and arm the grace-period timeout.

        Returns AWAITING_SERVER when accepted; any other status means the
        submission was refused and nothing changed.
        """
        status = self.check_submit(question)
        if not status.accepted:
            logger.info(f"Answer refused: {status.value}")
            return status

        self._discard_pending()
        correlation = PendingCorrelation(
            question_id=question.question_id,
            user_id=user_id,
            created_at_ms=self._clock(),
        )
        correlation.timeout_handle = self._scheduler.call_later(
            self.grace_period_seconds, lambda: self._on_timeout(correlation),
        )
        self._pending = correlation
        self._answered_qid = question.question_id
        logger.info(
            f"Awaiting score for {question.question_id} "
            f"(grace {self.grace_period_seconds:.1f}s)"
        )
        return status

    def reset_question(self) -> None:
        """Forget which question was answered (a new question opened)."""
        self._answered_qid = None

    # ── Resolution ───────────────────────────────────────────

    def resolve_acknowledgment(self, user_id: str, question_id: Optional[str]) -> bool:
        """
        Clear the pending correlation if the score belongs to it.

        Scores for other users or other questions are ignored. A score
        without a question id matches the pending entry when the user
        matches, since at most one answer can be outstanding.
        """
        pending = self._pending
        if pending is None:
            logger.debug(f"Score for {user_id}/{question_id} ignored: nothing pending")
            return False
        if user_id != pending.user_id:
            return False
        if question_id is None:
            logger.warning(
                f"score.update without qid; matching the pending answer for "
                f"{pending.question_id}"
            )
        elif question_id != pending.question_id:
            logger.debug(
                f"Score for {question_id} ignored: awaiting {pending.question_id}"
            )
            return False

        self._resolve(ResolutionReason.ACKNOWLEDGED)
        return True

    def clear(self, reason: ResolutionReason) -> bool:
        """Clear the pending correlation (reveal, new question, disconnect)."""
        if self._pending is None:
            return False
        self._resolve(reason)
        return True

    def _on_timeout(self, correlation: PendingCorrelation) -> None:
        if self._pending is not correlation:
            return
        logger.info(
            f"No score for {correlation.question_id} within "
            f"{self.grace_period_seconds:.1f}s; giving up"
        )
        self._resolve(ResolutionReason.TIMED_OUT)

    def _resolve(self, reason: ResolutionReason) -> None:
        correlation = self._pending
        self._discard_pending()
        logger.debug(f"Correlation for {correlation.question_id} cleared: {reason.value}")
        for listener in list(self._listeners):
            listener(reason, correlation)

    def _discard_pending(self) -> None:
        if self._pending is not None and self._pending.timeout_handle is not None:
            self._pending.timeout_handle.cancel()
        self._pending = None
