# Area: Session
"""
pushquiz_client._session.snapshot — Session state snapshot builder
==================================================================

Builds the serializable view of a session handed to observers.
"""

from typing import Any, Dict, Optional

from .close_coordinator import CloseCoordinator
from .correlator import AnswerCorrelator
from .deadline_timer import DeadlineTimer
from .enums import SessionPhase
from .state import ActiveQuestion, SessionState


def build_state_snapshot(
    phase: SessionPhase,
    state: SessionState,
    timer: DeadlineTimer,
    correlator: AnswerCorrelator,
    closer: CloseCoordinator,
) -> Dict[str, Any]:
    """Build a plain-dict snapshot of the observable session state."""
    return {
        "phase": phase.value,
        "room_id": state.room_id,
        "user_id": state.user_id,
        "question": _question_snapshot(state.active_question),
        "remaining_seconds": timer.remaining_seconds,
        "elapsed_fraction": timer.elapsed_fraction,
        "time_up": timer.is_expired,
        "answered": state.answered,
        "accepted": state.accepted,
        "awaiting_score_for": correlator.awaiting_qid,
        "close_state": closer.current_state.value,
        "last_score": _score_snapshot(state),
    }


def _question_snapshot(question: Optional[ActiveQuestion]) -> Optional[Dict[str, Any]]:
    if question is None:
        return None
    return {
        "qid": question.question_id,
        "order": question.order,
        "text": question.text,
        "options": list(question.options),
        "time_limit_seconds": question.time_limit_seconds,
        "deadline_ms": question.deadline_ms,
        "answer_window_id": question.answer_window_id,
    }


def _score_snapshot(state: SessionState) -> Optional[Dict[str, Any]]:
    if state.last_score is None:
        return None
    return {
        "qid": state.last_score.question_id,
        "delta": state.last_score.delta,
        "total": state.last_score.total,
    }
