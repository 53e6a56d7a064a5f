# Area: Session
"""
pushquiz_client._session.handlers — Inbound message handlers
============================================================

One function per inbound message type. Each receives the validated
message inside a HandlerContext and updates the session components.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .enums import ResolutionReason
from .state import ActiveQuestion, ScoreSnapshot

if TYPE_CHECKING:
    from .router import HandlerContext

logger = logging.getLogger("pushquiz_client.handlers")


def handle_question_show(ctx: "HandlerContext") -> None:
    """Replace the active question, reset answer state and start the countdown."""
    payload = ctx.message.payload
    question = ActiveQuestion(
        question_id=payload.qid,
        order=payload.order,
        text=payload.text,
        options=list(payload.options),
        time_limit_seconds=payload.timeLimitSec,
        server_issued_at_ms=payload.serverTs,
        answer_window_id=payload.answerWindowId,
    )
    ctx.correlator.clear(ResolutionReason.SUPERSEDED)
    ctx.correlator.reset_question()
    ctx.state.show_question(question)
    ctx.protocol_logger.set_question(question.question_id)
    ctx.timer.start(question.server_issued_at_ms, question.time_limit_seconds)


def handle_answer_received(ctx: "HandlerContext") -> None:
    """Update the optimistic acceptance flag for the current answer."""
    if not ctx.state.answered:
        logger.debug("answer.received with no answer outstanding; ignored")
        return
    ctx.state.accepted = ctx.message.payload.accepted
    logger.info(f"Answer status: {ctx.message.payload.status}")


def handle_score_update(ctx: "HandlerContext") -> None:
    """Hand the score to the correlator; remember it if it is ours."""
    payload = ctx.message.payload
    if payload.userId == ctx.state.user_id:
        ctx.state.last_score = ScoreSnapshot(
            question_id=payload.qid, delta=payload.delta, total=payload.total,
        )
    ctx.correlator.resolve_acknowledgment(payload.userId, payload.qid)


def handle_question_reveal(ctx: "HandlerContext") -> None:
    """End the question: clear it, stop the countdown, drop any pending answer."""
    ctx.state.clear_question()
    ctx.protocol_logger.set_question(None)
    ctx.timer.stop()
    ctx.correlator.clear(ResolutionReason.REVEALED)
