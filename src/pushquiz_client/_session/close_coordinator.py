# Area: Session
"""
pushquiz_client._session.close_coordinator — Deferred disconnect
================================================================

When the user asks to disconnect while an answer is still waiting for
its score, the close is held back until the correlation clears (score,
grace-period timeout, or reveal). Once requested, a close is never
cancelled; the grace period bounds how long it can be deferred.
"""

import logging
from typing import Callable

from .correlator import AnswerCorrelator, PendingCorrelation
from .enums import CloseEvent, CloseState, ResolutionReason

logger = logging.getLogger("pushquiz_client.close_coordinator")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    CloseState.IDLE: {
        CloseEvent.REQUEST_WHILE_PENDING: CloseState.CLOSE_REQUESTED,
        CloseEvent.REQUEST_IDLE: CloseState.CLOSED,
        CloseEvent.TRANSPORT_CLOSED: CloseState.CLOSED,
    },
    CloseState.CLOSE_REQUESTED: {
        CloseEvent.CORRELATION_RESOLVED: CloseState.CLOSED,
        CloseEvent.TRANSPORT_CLOSED: CloseState.CLOSED,
    },
    CloseState.CLOSED: {},
}


class CloseCoordinator:
    """
    State machine for user-initiated disconnects.

    Attributes:
        current_state: IDLE, CLOSE_REQUESTED or CLOSED
    """

    def __init__(self, correlator: AnswerCorrelator, close_transport: Callable[[], None]):
        self.current_state = CloseState.IDLE
        self._correlator = correlator
        self._close_transport = close_transport
        correlator.add_listener(self._on_correlation_resolved)

    @property
    def close_requested(self) -> bool:
        return self.current_state == CloseState.CLOSE_REQUESTED

    def can_transition(self, event: CloseEvent) -> bool:
        return event in TRANSITIONS.get(self.current_state, {})

    def transition(self, event: CloseEvent) -> CloseState:
        """
        Execute a state transition.

        Events that are not valid in the current state are ignored.
        """
        if not self.can_transition(event):
            logger.debug(f"Ignored {event.value} in {self.current_state.value}")
            return self.current_state
        next_state = TRANSITIONS[self.current_state][event]
        logger.debug(f"Close: {self.current_state.value} → {next_state.value}")
        self.current_state = next_state
        return next_state

    def request_close(self) -> CloseState:
        """
        Handle a user request to disconnect.

        Closes at once when nothing is pending, otherwise defers until the
        pending correlation clears. Repeated requests are no-ops.
        """
        if self.current_state != CloseState.IDLE:
            return self.current_state

        if self._correlator.has_pending:
            logger.info(
                f"Waiting for score of {self._correlator.awaiting_qid} before closing"
            )
            return self.transition(CloseEvent.REQUEST_WHILE_PENDING)

        self.transition(CloseEvent.REQUEST_IDLE)
        self._close_transport()
        return self.current_state

    def on_transport_closed(self) -> None:
        self.transition(CloseEvent.TRANSPORT_CLOSED)

    def _on_correlation_resolved(
        self, reason: ResolutionReason, correlation: PendingCorrelation
    ) -> None:
        if self.current_state != CloseState.CLOSE_REQUESTED:
            return
        logger.info(
            f"Correlation for {correlation.question_id} {reason.value.lower()}; closing"
        )
        self.transition(CloseEvent.CORRELATION_RESOLVED)
        self._close_transport()
