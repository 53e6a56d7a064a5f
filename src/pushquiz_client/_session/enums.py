# Area: Session
"""
pushquiz_client._session.enums — Session enums
==============================================

States and events for the participant session, the close coordinator
and the answer correlator.
"""

from enum import Enum


class SessionPhase(Enum):
    """Connection phase of the session."""
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    JOINED = "JOINED"


class CloseState(Enum):
    """
    States of the close coordinator.

    State transitions:
    IDLE -> CLOSE_REQUESTED (on REQUEST_WHILE_PENDING)
    IDLE -> CLOSED (on REQUEST_IDLE)
    CLOSE_REQUESTED -> CLOSED (on CORRELATION_RESOLVED)
    Any state -> CLOSED (on TRANSPORT_CLOSED)
    """
    IDLE = "IDLE"
    CLOSE_REQUESTED = "CLOSE_REQUESTED"
    CLOSED = "CLOSED"


class CloseEvent(Enum):
    """
    Events that drive the close coordinator.

    - REQUEST_WHILE_PENDING: user asked to disconnect, an answer awaits its score
    - REQUEST_IDLE: user asked to disconnect, nothing is pending
    - CORRELATION_RESOLVED: pending answer acknowledged, timed out or revealed
    - TRANSPORT_CLOSED: transport went away (local or remote)
    """
    REQUEST_WHILE_PENDING = "REQUEST_WHILE_PENDING"
    REQUEST_IDLE = "REQUEST_IDLE"
    CORRELATION_RESOLVED = "CORRELATION_RESOLVED"
    TRANSPORT_CLOSED = "TRANSPORT_CLOSED"


class SubmitStatus(Enum):
    """Outcome of an answer submission attempt."""
    AWAITING_SERVER = "AWAITING_SERVER"        # accepted locally, score pending
    ALREADY_ANSWERED = "ALREADY_ANSWERED"
    NO_ACTIVE_QUESTION = "NO_ACTIVE_QUESTION"
    TIME_UP = "TIME_UP"
    NOT_CONNECTED = "NOT_CONNECTED"
    INVALID_OPTION = "INVALID_OPTION"

    @property
    def accepted(self) -> bool:
        return self is SubmitStatus.AWAITING_SERVER


class ResolutionReason(Enum):
    """Why a pending correlation was cleared."""
    ACKNOWLEDGED = "ACKNOWLEDGED"    # matching score.update
    TIMED_OUT = "TIMED_OUT"          # grace period elapsed
    REVEALED = "REVEALED"            # question.reveal ended the question
    SUPERSEDED = "SUPERSEDED"        # a new question.show replaced it
    DISCONNECTED = "DISCONNECTED"    # transport closed
