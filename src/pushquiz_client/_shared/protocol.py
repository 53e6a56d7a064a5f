# Area: Shared
"""
pushquiz_client._shared.protocol — Protocol helpers for message formatting
==========================================================================

Wire constants, envelope encoding/decoding and the play URL for the
room socket. Every frame is a JSON object ``{"type": ..., "payload": {...}}``.
"""

import json
import logging
import time
from typing import Any, Dict

from tzlocal import get_localzone_name

from ..errors import MalformedMessageError

logger = logging.getLogger("pushquiz_client.protocol")

DEFAULT_SERVER_URL = "ws://localhost:8080"
PLAY_PATH_TEMPLATE = "/v1/rooms/{room_id}/play"

# Close codes
NORMAL_CLOSURE = 1000
CLIENT_CLOSED_REASON = "client-closed"

# Outbound message types
AUTH_JOIN = "auth.join"
HOST_START = "host.start"
ANSWER_SUBMIT = "answer.submit"

# Inbound message types
QUESTION_SHOW = "question.show"
ANSWER_RECEIVED = "answer.received"
SCORE_UPDATE = "score.update"
QUESTION_REVEAL = "question.reveal"

INBOUND_MESSAGE_TYPES = {
    QUESTION_SHOW,
    ANSWER_RECEIVED,
    SCORE_UPDATE,
    QUESTION_REVEAL,
}

ACCEPTED_STATUS = "ACCEPTED"


def build_play_url(base_url: str, room_id: str) -> str:
    """Build the room play URL, e.g. ``ws://host:8080/v1/rooms/R1/play``."""
    if not room_id:
        raise ValueError("room_id must not be empty")
    return base_url.rstrip("/") + PLAY_PATH_TEMPLATE.format(room_id=room_id)


def current_timestamp_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def local_timezone_name() -> str:
    """IANA name of the local timezone (e.g. 'Europe/Berlin'), 'UTC' if unknown."""
    try:
        return get_localzone_name() or "UTC"
    except LookupError as e:
        logger.debug(f"Local timezone not found ({e}); using UTC")
        return "UTC"


def build_envelope(message_type: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Build an outgoing message envelope."""
    return {"type": message_type, "payload": payload}


def encode_envelope(envelope: Dict[str, Any]) -> str:
    """Serialize an envelope to compact JSON text."""
    return json.dumps(envelope, separators=(",", ":"))


def decode_envelope(raw: Any) -> Dict[str, Any]:
    """
    Parse an inbound frame into a dict.

    Raises MalformedMessageError if the frame is not a JSON object.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedMessageError(raw, f"not UTF-8: {e}") from e
    try:
        body = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedMessageError(raw, f"not JSON: {e}") from e
    if not isinstance(body, dict):
        raise MalformedMessageError(raw, f"expected object, got {type(body).__name__}")
    return body
