# Area: Shared
"""
pushquiz_client._runner_config — Client Configuration
=====================================================

Defaults and validation for the participant client configuration.
The config is a plain dict loaded once at startup (file, environment,
CLI flags) and injected into the runner and the session.
"""

from typing import Any, Dict

from ._shared.protocol import DEFAULT_SERVER_URL
from .errors import ConfigError

REQUIRED_CONFIG_KEYS = [
    "room_id",
    "user_id",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_url": DEFAULT_SERVER_URL,
    "token": "demo",
    "is_host": False,
    "device_ua": "python",
    "timezone": None,                 # None = local timezone
    "latency_ms": 0,
    "grace_period_seconds": 4.0,
    "tick_interval_seconds": 0.1,
    "log_file": "pushquiz_client.log",
}

_POSITIVE_KEYS = ("grace_period_seconds", "tick_interval_seconds")


def with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` with defaults filled in for missing keys."""
    merged = dict(DEFAULT_CONFIG)
    merged.update(config)
    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate required configuration keys and timing values.

    Args:
        config: Configuration dict

    Raises:
        ConfigError: If required keys are missing or a timing value is invalid
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ConfigError(f"Missing required config keys: {missing}")

    for key in _POSITIVE_KEYS:
        if key not in config:
            continue
        try:
            value = float(config[key])
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be a number, got {config[key]!r}")
        if value <= 0:
            raise ConfigError(f"{key} must be positive, got {value}")


def parse_bool(value: Any) -> bool:
    """Interpret config/env flags such as '1', 'true', 'yes'."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")
