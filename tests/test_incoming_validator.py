# Area: Session Tests
"""Tests for validate_envelope — inbound envelope structure checks."""

import pytest

from pushquiz_client._session.incoming_validator import validate_envelope


class TestValidateEnvelope:
    """Tests for top-level envelope validation."""

    def test_valid_envelope(self):
        assert validate_envelope({"type": "question.reveal", "payload": {}}) == []

    def test_unknown_type_is_structurally_valid(self):
        assert validate_envelope({"type": "future.thing", "payload": {"a": 1}}) == []

    def test_missing_type(self):
        assert validate_envelope({"payload": {}}) == ["Missing required field: type"]

    def test_non_string_type(self):
        assert validate_envelope({"type": 7, "payload": {}}) == ["'type' must be a string"]

    def test_missing_payload(self):
        assert validate_envelope({"type": "score.update"}) == ["Missing required field: payload"]

    def test_non_dict_payload(self):
        assert validate_envelope({"type": "score.update", "payload": []}) == [
            "'payload' must be an object"
        ]

    def test_collects_all_errors(self):
        assert len(validate_envelope({})) == 2

    @pytest.mark.parametrize("body", [None, [], "text", 3])
    def test_non_dict_body(self, body):
        errors = validate_envelope(body)
        assert len(errors) == 1
        assert errors[0].startswith("Envelope must be an object")
