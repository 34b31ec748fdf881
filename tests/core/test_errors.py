"""Error Hierarchy — verifies codes, HTTP statuses and the REST envelope."""

from pizzasplit.core.errors import (
    PizzaSplitError, ErrorCategory, ErrorSeverity,
    InvalidParticipantError, InvalidSettingsError, UnknownSchemeError,
    ResourceNotFoundError, InsufficientSupplyError, DatabaseError,
)


def test_input_errors_are_400():
    assert InvalidParticipantError("bad").http_status == 400
    assert InvalidSettingsError("bad", field="x").http_status == 400
    assert UnknownSchemeError("nope").http_status == 400


def test_not_found_is_404():
    err = ResourceNotFoundError("Order", "abc")
    assert err.http_status == 404
    assert err.message == "Order 'abc' not found"


def test_insufficient_supply_is_critical():
    err = InsufficientSupplyError(available=4, required=6)
    assert err.http_status == 500
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.category == ErrorCategory.INTERNAL


def test_database_error_is_503():
    err = DatabaseError("connection refused", operation="commit")
    assert err.http_status == 503
    assert "commit" in err.message


def test_every_error_is_a_pizzasplit_error():
    for err in (
        InvalidParticipantError("x"),
        UnknownSchemeError("x"),
        InsufficientSupplyError(1, 2),
    ):
        assert isinstance(err, PizzaSplitError)


def test_to_response_envelope():
    body = InvalidParticipantError("min too high", participant_id="p-1").to_response()
    error = body["error"]
    assert error["code"] == "INVALID_PARTICIPANT"
    assert error["category"] == "validation"
    assert error["severity"] == "error"
    assert error["context"]["participant_id"] == "p-1"
    assert "timestamp" in error


def test_unknown_scheme_carries_scheme_id():
    body = UnknownSchemeError("bogus").to_response()
    assert body["error"]["context"]["scheme_id"] == "bogus"
    assert "bogus" in body["error"]["message"]
