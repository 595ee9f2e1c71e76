"""Unit tests for the exception hierarchy."""

from mwkit.query.core import (
    ApiError,
    InvalidRequestShapeError,
    MergeConflictError,
    ProtocolExhaustionError,
    QueryError,
    TooManyEmptyResponsesError,
)


def test_merge_conflict_error_names_path_and_shapes():
    error = MergeConflictError("a.b", "array", "object")
    assert error.path == "a.b"
    assert "a.b" in str(error)
    assert "array" in str(error) and "object" in str(error)
    assert isinstance(error, QueryError)


def test_too_many_empty_responses_error_carries_limit():
    error = TooManyEmptyResponsesError(3, request_id="abc")
    assert error.limit == 3
    assert error.request_id == "abc"
    assert "3" in str(error)


def test_invalid_request_shape_is_value_error():
    error = InvalidRequestShapeError("bad")
    assert isinstance(error, ValueError)
    assert isinstance(error, QueryError)


def test_protocol_exhaustion_error():
    assert isinstance(ProtocolExhaustionError("done"), QueryError)


def test_api_error_message():
    assert str(ApiError("badtoken", "Invalid CSRF token.")) == "badtoken: Invalid CSRF token."
    assert str(ApiError("internal_api_error")) == "internal_api_error"
