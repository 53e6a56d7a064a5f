"""
pushquiz_client.types — TypedDict schemas for outbound messages
===============================================================

Exact structure of the payloads the participant sends. Inbound
messages are validated with the pydantic models in
``pushquiz_client._session.messages``.

    >>> AnswerSubmitPayload.__annotations__
    {'qid': str, 'optionIndex': int, 'answerWindowId': Optional[str], 'clientTs': int}
"""

from typing import Any, Dict, Optional, TypedDict


# ============================================
# auth.join
# ============================================

class DeviceInfo(TypedDict):
    """Client metadata sent with the join command."""
    ua: str                 # e.g., "python"
    tz: str                 # local timezone name
    latencyMs: int          # measured latency (0 = not measured)


class AuthJoinPayload(TypedDict):
    """Sent once, right after the transport opens."""
    roomId: str
    userId: str
    token: str
    device: DeviceInfo


# ============================================
# host.start
# ============================================

class HostStartPayload(TypedDict):
    """Sent only by a participant configured as host."""
    roomId: str


# ============================================
# answer.submit
# ============================================

class AnswerSubmitPayload(TypedDict):
    """Sent at most once per question.

    Fields
    ------
    qid : str
        Question identifier from question.show.
    optionIndex : int
        Zero-based index into the question's options.
    answerWindowId : str or None
        Answer window of the question being answered.
    clientTs : int
        Client wall clock at submission, epoch milliseconds.
    """
    qid: str
    optionIndex: int
    answerWindowId: Optional[str]
    clientTs: int


SessionSnapshot = Dict[str, Any]
