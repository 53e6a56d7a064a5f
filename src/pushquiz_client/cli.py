# Area: Runner
"""
pushquiz_client.cli — Command-line interface
============================================

Provides the CLI entry point for the participant client.

Usage:
    python -m pushquiz_client --room R1 --user U1
    python -m pushquiz_client --config client.json --host

Configuration is loaded once at startup, later sources winning:
    1. JSON config file (--config)
    2. Environment variables (a .env file in the working dir is loaded)
    3. CLI flags
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ._runner_config import parse_bool
from .errors import ConfigError, TransportError

# Environment variable → config key
ENV_MAPPINGS = {
    "PUSHQUIZ_SERVER_URL": "server_url",
    "PUSHQUIZ_ROOM_ID": "room_id",
    "PUSHQUIZ_USER_ID": "user_id",
    "PUSHQUIZ_TOKEN": "token",
    "PUSHQUIZ_IS_HOST": "is_host",
    "PUSHQUIZ_GRACE_PERIOD_SECONDS": "grace_period_seconds",
    "PUSHQUIZ_TICK_INTERVAL_SECONDS": "tick_interval_seconds",
    "PUSHQUIZ_LOG_FILE": "log_file",
}

_FLOAT_KEYS = {"grace_period_seconds", "tick_interval_seconds"}


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="PushQuiz participant client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pushquiz_client --room R1 --user U1
  python -m pushquiz_client --config client.json --host
  PUSHQUIZ_ROOM_ID=R1 PUSHQUIZ_USER_ID=U1 python -m pushquiz_client
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--url", dest="server_url", type=str,
                        help="Server base URL (default ws://localhost:8080)")
    parser.add_argument("--room", dest="room_id", type=str, help="Room ID to join")
    parser.add_argument("--user", dest="user_id", type=str, help="Your user ID")
    parser.add_argument("--host", dest="is_host", action="store_true", default=None,
                        help="Act as host (enables the 'start' command)")
    parser.add_argument("--grace-period", dest="grace_period_seconds", type=float,
                        help="Seconds to wait for a score before giving up (default 4)")
    parser.add_argument("--log-file", dest="log_file", type=str,
                        help="Path to the JSON log file")
    parser.add_argument("--verbose", action="store_true",
                        help="Show debug logs instead of protocol lines only")
    return parser.parse_args(argv)


def load_config(config_path: Optional[str], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Load config from file, then override with environment variables."""
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    environ = os.environ if environ is None else environ
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in environ:
            value: Any = environ[env_key]
            if config_key in _FLOAT_KEYS:
                try:
                    value = float(value)
                except ValueError:
                    raise ConfigError(f"{env_key} must be a number, got {value!r}")
            elif config_key == "is_host":
                value = parse_bool(value)
            config[config_key] = value

    return config


def apply_cli_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Overlay CLI flags that were given on top of ``config``."""
    merged = dict(config)
    for key in ("server_url", "room_id", "user_id", "is_host",
                "grace_period_seconds", "log_file"):
        value = getattr(args, key, None)
        if value is not None:
            merged[key] = value
    return merged


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = apply_cli_overrides(load_config(args.config), args)
        from .runner import PlayerRunner
        runner = PlayerRunner(config=config, verbose=args.verbose)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set via config file, environment variables or CLI flags.", file=sys.stderr)
        return 1

    try:
        runner.run()
    except TransportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
