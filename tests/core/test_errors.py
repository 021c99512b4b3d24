"""Error Hierarchy — codes, categories, payload attributes, and the envelope."""

from apitime.core.domain_types import DecodingErrorKind
from apitime.core.errors import (
    APITimeError,
    ConfigurationNotFoundError,
    DecodingError,
    EncodingError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    HTTPError,
    InvalidResponseError,
    TransportError,
)


def test_configuration_not_found_keeps_key():
    error = ConfigurationNotFoundError("missing")
    assert error.key == "missing"
    assert error.code == "CONFIGURATION_NOT_FOUND"
    assert str(error) == "API configuration not found for key: missing"


def test_http_error_keeps_status_and_headers():
    error = HTTPError(404, {"x-request-id": "r1"})
    assert error.status_code == 404
    assert error.headers == {"x-request-id": "r1"}
    assert error.category == ErrorCategory.HTTP_STATUS
    assert "404" in error.message


def test_decoding_error_fields():
    error = DecodingError(
        DecodingErrorKind.MISSING_FIELD, "user.name", "Field required", '{"user": {}}',
    )
    assert error.kind == DecodingErrorKind.MISSING_FIELD
    assert error.path == "user.name"
    assert error.raw_snippet == '{"user": {}}'
    assert error.message == "Missing Key at user.name: Field required"


def test_decoding_error_root_level_message():
    error = DecodingError(DecodingErrorKind.CORRUPTED_DATA, "", "not JSON")
    assert error.message == "Data Corruption at Root Level: not JSON"


def test_causes_are_kept():
    cause = TypeError("bad")
    assert EncodingError("bad", cause=cause).cause is cause
    assert TransportError("down", cause=cause).cause is cause


def test_all_errors_share_base():
    errors = [
        ConfigurationNotFoundError("k"),
        InvalidResponseError("not http"),
        HTTPError(500, {}),
        EncodingError("x"),
        DecodingError(DecodingErrorKind.UNKNOWN, "", "x"),
        TransportError("x"),
    ]
    assert all(isinstance(e, APITimeError) for e in errors)
    assert len({e.code for e in errors}) == len(errors)


def test_to_dict_envelope():
    context = ErrorContext(operation="GET /users -> User", configuration_key="svc")
    envelope = InvalidResponseError("not http", context=context).to_dict()["error"]
    assert envelope["code"] == "INVALID_RESPONSE"
    assert envelope["severity"] == ErrorSeverity.CRITICAL.value
    assert envelope["context"]["configuration_key"] == "svc"
    assert envelope["context"]["operation"] == "GET /users -> User"
