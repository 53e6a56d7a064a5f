# Area: Session
"""
pushquiz_client._session.messages — Inbound message models
===========================================================

One pydantic model per inbound message type, combined into a
discriminated union on ``type``. Every message is validated against its
variant before the session touches it. Unknown extra fields are
allowed so newer servers can add data without breaking older clients.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import InvalidPayloadError, UnknownMessageTypeError
from .._shared.protocol import ACCEPTED_STATUS, INBOUND_MESSAGE_TYPES


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow")


class QuestionShowPayload(_Payload):
    qid: str
    order: int = 0
    text: str = ""
    options: List[str] = Field(default_factory=list)
    timeLimitSec: float = Field(gt=0)
    serverTs: int = Field(ge=0)
    answerWindowId: Optional[str] = None


class AnswerReceivedPayload(_Payload):
    status: str

    @property
    def accepted(self) -> bool:
        return self.status == ACCEPTED_STATUS


class ScoreUpdatePayload(_Payload):
    userId: str
    qid: Optional[str] = None
    delta: float = 0
    total: Optional[float] = None


class QuestionRevealPayload(_Payload):
    pass


class QuestionShow(BaseModel):
    type: Literal["question.show"]
    payload: QuestionShowPayload


class AnswerReceived(BaseModel):
    type: Literal["answer.received"]
    payload: AnswerReceivedPayload


class ScoreUpdate(BaseModel):
    type: Literal["score.update"]
    payload: ScoreUpdatePayload


class QuestionReveal(BaseModel):
    type: Literal["question.reveal"]
    payload: QuestionRevealPayload = Field(default_factory=QuestionRevealPayload)


InboundMessage = Annotated[
    Union[QuestionShow, AnswerReceived, ScoreUpdate, QuestionReveal],
    Field(discriminator="type"),
]

_INBOUND_ADAPTER: TypeAdapter = TypeAdapter(InboundMessage)


def _format_validation_errors(exc: ValidationError) -> List[str]:
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        errors.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return errors


def parse_inbound(body: Dict[str, Any]) -> Union[QuestionShow, AnswerReceived, ScoreUpdate, QuestionReveal]:
    """
    Validate a decoded envelope against its message variant.

    Raises
    ------
    UnknownMessageTypeError
        If ``type`` is not one of the inbound message types.
    InvalidPayloadError
        If the payload does not satisfy the variant's schema.
    """
    message_type = body.get("type")
    if message_type not in INBOUND_MESSAGE_TYPES:
        raise UnknownMessageTypeError(message_type)
    try:
        return _INBOUND_ADAPTER.validate_python(body)
    except ValidationError as e:
        raise InvalidPayloadError(
            message_type=message_type,
            payload=body.get("payload"),
            validation_errors=_format_validation_errors(e),
        ) from e
