# Area: Shared
"""
pushquiz_client.errors — Custom exception classes
==================================================

Defines the exception hierarchy for the participant client.
Protocol errors store the offending message for structured logging;
none of them is fatal to the surrounding process.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class PushQuizClientError(Exception):
    """Base exception for all PushQuiz client errors."""
    pass


class ConfigError(PushQuizClientError, ValueError):
    """Raised when the client configuration is incomplete or invalid."""
    pass


class TransportError(PushQuizClientError):
    """Raised when the transport cannot be opened or written to."""
    pass


class AlreadyConnectedError(PushQuizClientError):
    """Raised when connect() is called on a session that is not disconnected."""
    pass


class NotConnectedError(PushQuizClientError):
    """Raised when a command needs an open transport and there is none."""
    pass


class ProtocolError(PushQuizClientError):
    """Base class for inbound messages that cannot be applied to the session."""

    error_type = "PROTOCOL_ERROR"

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message_type=None,
            raw=None,
            payload=None,
            validation_errors=[str(self)],
        )


class MalformedMessageError(ProtocolError):
    """Raised when an inbound frame is not a JSON object."""

    error_type = "MALFORMED_MESSAGE"

    def __init__(self, raw: Any, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed message ({reason}): {raw!r}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message_type=None,
            raw=self.raw,
            payload=None,
            validation_errors=[self.reason],
        )


class UnknownMessageTypeError(ProtocolError):
    """Raised when an inbound message declares a type the client does not know."""

    error_type = "UNKNOWN_MESSAGE_TYPE"

    def __init__(self, message_type: Any):
        self.message_type = message_type
        super().__init__(f"Unknown message type: {message_type!r}")


class InvalidPayloadError(ProtocolError):
    """Raised when a known message type carries a payload that fails validation."""

    error_type = "INVALID_PAYLOAD"

    def __init__(
        self,
        message_type: Optional[str],
        payload: Any,
        validation_errors: List[str],
    ):
        self.message_type = message_type
        self.payload = payload
        self.validation_errors = validation_errors
        super().__init__(
            f"Message '{message_type}' failed validation: {validation_errors}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message_type=self.message_type,
            raw=None,
            payload=self.payload,
            validation_errors=self.validation_errors,
        )


def _format_error_block(
    error_type: str,
    message_type: Optional[str],
    raw: Any,
    payload: Optional[Dict[str, Any]],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for the log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " PROTOCOL ERROR — MESSAGE DROPPED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
    ]

    if message_type is not None:
        lines.append(f" Message:      {message_type}")

    if raw is not None:
        lines.append("")
        lines.append(" ── RAW FRAME " + "─" * 50)
        lines.append(f" {raw!r}")

    if payload is not None:
        lines.append("")
        lines.append(" ── PAYLOAD " + "─" * 52)
        lines.append(_indent_json(payload))

    if validation_errors:
        lines.append("")
        lines.append(" ── VALIDATION ERRORS " + "─" * 42)
        for error in validation_errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Any, indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
