# Area: Shared
"""
Shared utilities used by the session core and the runner.

This package contains:
- Logging configuration
- Protocol helpers for message formatting
- The protocol event log
"""

from .logging_config import (
    setup_logging,
    log_protocol_error,
    enable_protocol_mode,
)
from .protocol import (
    DEFAULT_SERVER_URL,
    NORMAL_CLOSURE,
    CLIENT_CLOSED_REASON,
    INBOUND_MESSAGE_TYPES,
    build_play_url,
    build_envelope,
    encode_envelope,
    decode_envelope,
    current_timestamp_ms,
    local_timezone_name,
)
from .protocol_logger import ProtocolLogger

__all__ = [
    "setup_logging",
    "log_protocol_error",
    "enable_protocol_mode",
    "DEFAULT_SERVER_URL",
    "NORMAL_CLOSURE",
    "CLIENT_CLOSED_REASON",
    "INBOUND_MESSAGE_TYPES",
    "build_play_url",
    "build_envelope",
    "encode_envelope",
    "decode_envelope",
    "current_timestamp_ms",
    "local_timezone_name",
    "ProtocolLogger",
]
