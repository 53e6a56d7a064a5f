# Area: Shared Tests
"""Tests for protocol helpers: play URL and envelope codec."""

import json
from unittest.mock import patch

import pytest

from pushquiz_client._shared.protocol import (
    build_envelope,
    build_play_url,
    current_timestamp_ms,
    decode_envelope,
    encode_envelope,
    local_timezone_name,
)
from pushquiz_client.errors import MalformedMessageError


class TestBuildPlayUrl:
    """Tests for build_play_url()."""

    def test_joins_base_and_room(self):
        assert build_play_url("ws://localhost:8080", "R1") == "ws://localhost:8080/v1/rooms/R1/play"

    def test_tolerates_trailing_slash(self):
        assert build_play_url("wss://quiz.example.com/", "R1") == "wss://quiz.example.com/v1/rooms/R1/play"

    def test_empty_room_rejected(self):
        with pytest.raises(ValueError):
            build_play_url("ws://localhost:8080", "")


class TestEnvelope:
    """Tests for envelope building and decoding."""

    def test_build_envelope(self):
        assert build_envelope("host.start", {"roomId": "R1"}) == {
            "type": "host.start", "payload": {"roomId": "R1"},
        }

    def test_encode_is_compact_json(self):
        text = encode_envelope(build_envelope("host.start", {"roomId": "R1"}))
        assert text == '{"type":"host.start","payload":{"roomId":"R1"}}'

    def test_decode_object(self):
        raw = json.dumps({"type": "question.reveal", "payload": {}})
        assert decode_envelope(raw) == {"type": "question.reveal", "payload": {}}

    def test_decode_bytes(self):
        assert decode_envelope(b'{"type": "x", "payload": {}}')["type"] == "x"

    @pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", "42", '"text"', b"\xff\xfe"])
    def test_decode_rejects_non_objects(self, raw):
        with pytest.raises(MalformedMessageError) as exc_info:
            decode_envelope(raw)
        assert exc_info.value.raw == raw


class TestClockHelpers:
    """Tests for timestamp and timezone helpers."""

    def test_current_timestamp_ms(self):
        with patch("pushquiz_client._shared.protocol.time") as mock_time:
            mock_time.time.return_value = 1700000000.1234
            assert current_timestamp_ms() == 1700000000123

    def test_local_timezone_name_is_iana_id(self):
        with patch("pushquiz_client._shared.protocol.get_localzone_name",
                   return_value="America/Chicago"):
            assert local_timezone_name() == "America/Chicago"

    def test_local_timezone_name_falls_back_to_utc(self):
        with patch("pushquiz_client._shared.protocol.get_localzone_name",
                   side_effect=KeyError("no zone")):
            assert local_timezone_name() == "UTC"
        with patch("pushquiz_client._shared.protocol.get_localzone_name", return_value=None):
            assert local_timezone_name() == "UTC"
