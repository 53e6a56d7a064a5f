# Area: Session
"""
Participant session core.

This package contains:
- DeadlineTimer: server-synchronized countdown
- AnswerCorrelator: the single answer waiting for its score
- CloseCoordinator: deferred disconnect state machine
- MessageRouter: validated dispatch of inbound messages
"""

from .close_coordinator import CloseCoordinator
from .correlator import AnswerCorrelator, PendingCorrelation
from .deadline_timer import DeadlineTimer
from .enums import CloseEvent, CloseState, ResolutionReason, SessionPhase, SubmitStatus
from .router import MessageRouter
from .scheduling import LoopScheduler
from .state import ActiveQuestion, SessionState

__all__ = [
    "CloseCoordinator",
    "AnswerCorrelator",
    "PendingCorrelation",
    "DeadlineTimer",
    "CloseEvent",
    "CloseState",
    "ResolutionReason",
    "SessionPhase",
    "SubmitStatus",
    "MessageRouter",
    "LoopScheduler",
    "ActiveQuestion",
    "SessionState",
]
