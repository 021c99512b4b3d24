"""Decode Diagnostics — classification, field paths, and raw snippets.

Tests:
    - Each pydantic failure shape maps to the right DecodingErrorKind
    - Paths join container keys and list indices with dots
    - Raw bodies longer than the limit are truncated with a marker
"""

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from apitime.core.decode_diagnostics import (
    TRUNCATION_SUFFIX,
    classify_validation_error,
    format_diagnostics,
    raw_snippet,
    to_decoding_error,
)
from apitime.core.domain_types import DecodingErrorKind
from apitime.core.json_coders import PLAIN_CODER, PORTABLE_CODER, APIModel


class User(APIModel):
    id: int
    name: str


class Team(APIModel):
    members: list[User]


class Event(APIModel):
    starts_at: datetime


def _failure(data: bytes, response_type, coder=PLAIN_CODER):
    try:
        coder.decode(data, response_type)
    except Exception as e:
        return to_decoding_error(e, data)
    pytest.fail("decode unexpectedly succeeded")


def test_missing_field():
    error, diagnostics = _failure(b'{"id": 1}', User)
    assert error.kind == DecodingErrorKind.MISSING_FIELD
    assert error.path == ""
    assert "'name'" in error.description
    assert ("Error Type", "Missing Key 'name'") in diagnostics
    assert ("Location", "Root Level") in diagnostics


def test_missing_field_location_stops_at_parent():
    error, diagnostics = _failure(b'{"members": [{"id": 1}]}', Team)
    assert error.kind == DecodingErrorKind.MISSING_FIELD
    assert error.path == "members.0"
    assert error.message.startswith("Missing Key at members.0: No value associated with key 'name'")
    assert ("Error Type", "Missing Key 'name'") in diagnostics


def test_missing_value_for_null():
    error, _ = _failure(b'{"id": 1, "name": null}', User)
    assert error.kind == DecodingErrorKind.MISSING_VALUE
    assert error.path == "name"


def test_type_mismatch_with_nested_path():
    data = b'{"members": [{"id": 1, "name": "a"}, {"id": "x", "name": "b"}]}'
    error, _ = _failure(data, Team)
    assert error.kind == DecodingErrorKind.TYPE_MISMATCH
    assert error.path == "members.1.id"


def test_invalid_date_is_corrupted_data():
    error, _ = _failure(b'{"starts_at": "next week"}', Event, PORTABLE_CODER)
    assert error.kind == DecodingErrorKind.CORRUPTED_DATA
    assert error.path == "startsAt"
    assert "Invalid date format: next week" in error.description


def test_invalid_json_is_corrupted_at_root():
    error, diagnostics = _failure(b'{"id": 1,', User)
    assert error.kind == DecodingErrorKind.CORRUPTED_DATA
    assert error.path == ""
    assert ("Location", "Root Level") in diagnostics
    assert "not valid JSON" in error.description


def test_unexpected_exception_is_unknown():
    error, _ = to_decoding_error(RuntimeError("boom"), b"{}")
    assert error.kind == DecodingErrorKind.UNKNOWN
    assert error.description == "boom"


def test_extra_errors_are_counted_in_description():
    error, _ = _failure(b"{}", User)
    assert error.path == ""
    assert "'id'" in error.description
    assert error.description.endswith("(+1 more errors)")


@pytest.mark.parametrize("entry, kind", [
    ({"type": "missing", "loc": ("a",)}, DecodingErrorKind.MISSING_FIELD),
    ({"type": "int_type", "input": None}, DecodingErrorKind.MISSING_VALUE),
    ({"type": "int_parsing", "input": "x"}, DecodingErrorKind.TYPE_MISMATCH),
    ({"type": "model_type", "input": []}, DecodingErrorKind.TYPE_MISMATCH),
    ({"type": "value_error", "input": "x"}, DecodingErrorKind.CORRUPTED_DATA),
    ({"type": "literal_error", "input": "x"}, DecodingErrorKind.CORRUPTED_DATA),
    ({"type": "int_from_float", "input": 1.5}, DecodingErrorKind.UNKNOWN),
])
def test_classify_validation_error(entry, kind):
    assert classify_validation_error(entry) == kind


def test_raw_snippet_short_body_is_unchanged():
    assert raw_snippet(b'{"a": 1}') == '{"a": 1}'


def test_raw_snippet_truncates_long_body():
    body = json.dumps({"blob": "x" * 1500}).encode()
    snippet = raw_snippet(body, limit=1000)
    assert snippet.endswith(TRUNCATION_SUFFIX)
    assert len(snippet) == 1000 + len(TRUNCATION_SUFFIX)


def test_decoding_error_carries_snippet():
    body = b'{"id": 1}' + b" " * 50
    try:
        PLAIN_CODER.decode(body, User)
    except ValidationError as e:
        error, _ = to_decoding_error(e, body, limit=5)
    assert error.raw_snippet == '{"id"' + TRUNCATION_SUFFIX


def test_format_diagnostics_layout():
    text = format_diagnostics([("Error Type", "HTTP Error"), ("Status Code", "404")])
    assert text == "Error Type:\n\tHTTP Error\nStatus Code:\n\t404"
