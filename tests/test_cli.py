# Area: Runner Tests
"""Tests for CLI config loading and overrides."""

import json
from unittest.mock import patch

import pytest

from pushquiz_client.cli import apply_cli_overrides, load_config, main, parse_args
from pushquiz_client._runner_config import validate_config, with_defaults
from pushquiz_client.errors import ConfigError


class TestLoadConfig:
    """Tests for load_config()."""

    def test_reads_json_file(self, tmp_path):
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"room_id": "R1", "user_id": "U1"}), encoding="utf-8")
        assert load_config(str(path), environ={}) == {"room_id": "R1", "user_id": "U1"}

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"room_id": "R1", "user_id": "U1"}), encoding="utf-8")
        config = load_config(str(path), environ={
            "PUSHQUIZ_ROOM_ID": "R2",
            "PUSHQUIZ_IS_HOST": "yes",
            "PUSHQUIZ_GRACE_PERIOD_SECONDS": "2.5",
        })
        assert config["room_id"] == "R2"
        assert config["user_id"] == "U1"
        assert config["is_host"] is True
        assert config["grace_period_seconds"] == 2.5

    def test_missing_file_is_config_error(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.json"), environ={})

    def test_invalid_json_is_config_error(self, tmp_path):
        path = tmp_path / "client.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path), environ={})

    def test_bad_number_in_env(self):
        with pytest.raises(ConfigError):
            load_config(None, environ={"PUSHQUIZ_TICK_INTERVAL_SECONDS": "fast"})


class TestCliOverrides:
    """Tests for parse_args() + apply_cli_overrides()."""

    def test_flags_override_config(self):
        args = parse_args(["--room", "R9", "--host", "--grace-period", "6"])
        config = apply_cli_overrides({"room_id": "R1", "user_id": "U1"}, args)
        assert config == {
            "room_id": "R9", "user_id": "U1", "is_host": True, "grace_period_seconds": 6.0,
        }

    def test_absent_flags_leave_config(self):
        config = apply_cli_overrides({"is_host": True}, parse_args([]))
        assert config == {"is_host": True}


class TestValidateConfig:
    """Tests for validate_config() and defaults."""

    def test_defaults(self):
        config = with_defaults({"room_id": "R1", "user_id": "U1"})
        assert config["server_url"] == "ws://localhost:8080"
        assert config["grace_period_seconds"] == 4.0
        assert config["tick_interval_seconds"] == 0.1
        assert config["is_host"] is False

    def test_missing_keys(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_config({"room_id": "R1"})
        assert "user_id" in str(exc_info.value)

    @pytest.mark.parametrize("value", [0, -1, "abc"])
    def test_bad_grace_period(self, value):
        with pytest.raises(ConfigError):
            validate_config({"room_id": "R1", "user_id": "U1", "grace_period_seconds": value})


class TestMain:
    """Tests for the CLI entry point."""

    def test_missing_config_exits_with_error(self, capsys, monkeypatch):
        for key in ("PUSHQUIZ_ROOM_ID", "PUSHQUIZ_USER_ID"):
            monkeypatch.delenv(key, raising=False)
        with patch("pushquiz_client.cli.load_dotenv"):
            assert main(["--room", "R1"]) == 1
        assert "Missing required config keys" in capsys.readouterr().err

    def test_runs_player_runner(self, monkeypatch):
        with patch("pushquiz_client.cli.load_dotenv"), \
                patch("pushquiz_client.runner.PlayerRunner") as runner_cls:
            assert main(["--room", "R1", "--user", "U1", "--log-file", "x.log"]) == 0
        config = runner_cls.call_args.kwargs["config"]
        assert config["room_id"] == "R1"
        assert config["user_id"] == "U1"
        runner_cls.return_value.run.assert_called_once()
