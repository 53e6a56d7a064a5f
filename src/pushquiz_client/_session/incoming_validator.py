# Area: Session
"""
pushquiz_client._session.incoming_validator — Envelope format validation
========================================================================

Validates the outer structure of an inbound message before it is parsed
into its typed variant. Returns a list of error strings (empty list =
valid envelope). Payload contents are checked by the message models.
"""

from __future__ import annotations

from typing import Any, List


def validate_envelope(body: Any) -> List[str]:
    """
    Validate the top-level fields of an inbound message.

    Parameters
    ----------
    body : Any
        The decoded JSON body of the inbound frame.

    Returns
    -------
    List[str]
        List of validation error strings. Empty if the envelope is valid.
    """
    if not isinstance(body, dict):
        return [f"Envelope must be an object, got {type(body).__name__}"]

    errors: List[str] = []

    if "type" not in body:
        errors.append("Missing required field: type")
    elif not isinstance(body["type"], str):
        errors.append("'type' must be a string")

    if "payload" not in body:
        errors.append("Missing required field: payload")
    elif not isinstance(body["payload"], dict):
        errors.append("'payload' must be an object")

    return errors
