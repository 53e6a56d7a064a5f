# Area: Session
"""
pushquiz_client._session.state — Session state tracker
======================================================

Holds what the participant knows about the current room: the active
question (at most one), whether it has been answered, and the optimistic
acceptance flag. Replaced atomically on every question.show and cleared
on question.reveal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import logging

logger = logging.getLogger("pushquiz_client.state")


@dataclass(frozen=True)
class ActiveQuestion:
    """The question currently open for answers."""
    question_id: str
    order: int
    text: str
    options: List[str] = field(default_factory=list)
    time_limit_seconds: float = 0.0
    server_issued_at_ms: int = 0
    answer_window_id: Optional[str] = None

    @property
    def deadline_ms(self) -> float:
        return self.server_issued_at_ms + self.time_limit_seconds * 1000


@dataclass
class ScoreSnapshot:
    """Last score the server reported for this user."""
    question_id: Optional[str]
    delta: float
    total: Optional[float]


@dataclass
class SessionState:
    """
    Observable state of one participant session.

    Lives from connect to close; question-scoped fields are reset on
    every new question.
    """
    room_id: str
    user_id: str
    active_question: Optional[ActiveQuestion] = None
    answered: bool = False
    accepted: bool = False
    last_score: Optional[ScoreSnapshot] = None

    @property
    def current_qid(self) -> Optional[str]:
        return self.active_question.question_id if self.active_question else None

    def show_question(self, question: ActiveQuestion) -> None:
        """Replace the active question and reset per-question flags."""
        logger.info(f"[{self.room_id}] Question {question.order}: {question.question_id}")
        self.active_question = question
        self.answered = False
        self.accepted = False

    def clear_question(self) -> None:
        if self.active_question is not None:
            logger.info(f"[{self.room_id}] Question {self.active_question.question_id} revealed")
        self.active_question = None
        self.answered = False
        self.accepted = False
