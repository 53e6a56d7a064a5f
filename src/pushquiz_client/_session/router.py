# Area: Session
"""
pushquiz_client._session.router — Inbound message router
========================================================

Dispatches validated inbound messages to their handlers.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict

from .._shared.protocol import (
    ANSWER_RECEIVED,
    QUESTION_REVEAL,
    QUESTION_SHOW,
    SCORE_UPDATE,
)
from .._shared.protocol_logger import ProtocolLogger
from .correlator import AnswerCorrelator
from .deadline_timer import DeadlineTimer
from .handlers import (
    handle_answer_received,
    handle_question_reveal,
    handle_question_show,
    handle_score_update,
)
from .state import SessionState

logger = logging.getLogger("pushquiz_client.router")


@dataclass
class HandlerContext:
    """Context passed to handler functions."""

    state: SessionState
    timer: DeadlineTimer
    correlator: AnswerCorrelator
    protocol_logger: ProtocolLogger
    message: Any


HANDLERS: Dict[str, Callable[[HandlerContext], None]] = {
    QUESTION_SHOW: handle_question_show,
    ANSWER_RECEIVED: handle_answer_received,
    SCORE_UPDATE: handle_score_update,
    QUESTION_REVEAL: handle_question_reveal,
}


class MessageRouter:
    """Routes inbound messages of one session to the handler for their type."""

    def __init__(
        self,
        state: SessionState,
        timer: DeadlineTimer,
        correlator: AnswerCorrelator,
        protocol_logger: ProtocolLogger,
    ):
        self.state = state
        self.timer = timer
        self.correlator = correlator
        self.protocol_logger = protocol_logger

    def route(self, message: Any) -> bool:
        """Route a validated message. Returns False if no handler exists."""
        handler = HANDLERS.get(message.type)
        if handler is None:
            logger.debug(f"No handler for type={message.type}")
            return False

        handler(HandlerContext(
            state=self.state,
            timer=self.timer,
            correlator=self.correlator,
            protocol_logger=self.protocol_logger,
            message=message,
        ))
        return True
