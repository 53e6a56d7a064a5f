"""
pushquiz_client — PushQuiz participant client
=============================================

Joins a quiz room over a websocket, follows each question's countdown
against the server's deadline, submits one answer per question and
waits for that answer's score before letting the connection close.

Quick Start:
    from pushquiz_client import PlayerRunner
    PlayerRunner(config={"room_id": "R1", "user_id": "U1"}).run()

Embedding:
    from pushquiz_client import SessionConnection
    conn = SessionConnection(config)
    conn.add_observer(lambda snapshot: ...)
    await conn.connect()
    await conn.run()             # until the session closes
    conn.submit_answer(0)        # from UI callbacks
    conn.request_close()
"""

from .connection import SessionConnection
from .runner import PlayerRunner
from .transport import Transport, WebSocketTransport
from ._session import (
    ActiveQuestion,
    AnswerCorrelator,
    CloseCoordinator,
    CloseState,
    DeadlineTimer,
    ResolutionReason,
    SessionPhase,
    SubmitStatus,
)
from .errors import (
    PushQuizClientError,
    ConfigError,
    TransportError,
    AlreadyConnectedError,
    NotConnectedError,
    ProtocolError,
    MalformedMessageError,
    UnknownMessageTypeError,
    InvalidPayloadError,
)
from .types import (
    DeviceInfo,
    AuthJoinPayload,
    HostStartPayload,
    AnswerSubmitPayload,
)

__all__ = [
    # Main classes
    "SessionConnection",
    "PlayerRunner",
    "Transport",
    "WebSocketTransport",
    # Session core
    "ActiveQuestion",
    "AnswerCorrelator",
    "CloseCoordinator",
    "CloseState",
    "DeadlineTimer",
    "ResolutionReason",
    "SessionPhase",
    "SubmitStatus",
    # Errors
    "PushQuizClientError",
    "ConfigError",
    "TransportError",
    "AlreadyConnectedError",
    "NotConnectedError",
    "ProtocolError",
    "MalformedMessageError",
    "UnknownMessageTypeError",
    "InvalidPayloadError",
    # Outbound payload types
    "DeviceInfo",
    "AuthJoinPayload",
    "HostStartPayload",
    "AnswerSubmitPayload",
]
__version__ = "1.0.0"
