"""Error envelope and clock helper tests."""

import json
from datetime import datetime, timedelta, timezone

from utils.clock import next_after, utcnow
from utils.error_handling import (
    AssignmentError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    to_response,
)


def test_validation_error_carries_every_message():
    error = ValidationError(["a", "b"])
    assert error.status_code == 422
    assert str(error) == "Validation failed: a, b"
    assert error.errors == ["a", "b"]


def test_assignment_error_is_a_validation_error():
    error = AssignmentError(["Cannot assign closed tickets"])
    assert isinstance(error, ValidationError)
    assert str(error) == "Assignment failed: Cannot assign closed tickets"


def test_invalid_transition_accepts_enums():
    from models.ticket import TicketStatus

    error = InvalidTransitionError(TicketStatus.CLOSED, TicketStatus.NEW)
    assert error.status_code == 409
    assert error.details == {"current": "closed", "target": "new"}


def test_to_response_envelope():
    resp = to_response(NotFoundError("Ticket t-1 not found"))
    assert resp["statusCode"] == 404
    assert resp["headers"]["Content-Type"] == "application/json"
    assert json.loads(resp["body"]) == {"success": False, "error": "Ticket t-1 not found"}


def test_next_after_is_strictly_later():
    future = utcnow() + timedelta(seconds=5)
    assert next_after(future) == future + timedelta(microseconds=1)
    assert next_after(None).tzinfo == timezone.utc
    assert next_after(datetime(2000, 1, 1, tzinfo=timezone.utc)).year > 2000
