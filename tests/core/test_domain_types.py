"""Domain Types — verifies enum values and the query item shape.

Tests:
    - HTTPMethod values are the uppercase wire methods
    - DecodingErrorKind has exactly five members with stable string values
    - Every kind has a diagnostics label
"""

from apitime.core.domain_types import (
    ConfigurationKey,
    DecodingErrorKind,
    HTTPMethod,
)


def test_configuration_key_wraps_str():
    key = ConfigurationKey("svc")
    assert key == "svc"


def test_http_methods_are_uppercase_wire_values():
    assert [m.value for m in HTTPMethod] == ["GET", "POST", "PUT", "PATCH", "DELETE"]


def test_decoding_error_kind_has_exactly_five_kinds():
    assert len(DecodingErrorKind) == 5
    assert {k.value for k in DecodingErrorKind} == {
        "missing-field", "missing-value", "type-mismatch", "corrupted-data", "unknown",
    }


def test_every_kind_has_a_label():
    assert DecodingErrorKind.MISSING_FIELD.label == "Missing Key"
    assert DecodingErrorKind.CORRUPTED_DATA.label == "Data Corruption"
    assert all(k.label for k in DecodingErrorKind)


def test_enums_serialize_to_string():
    assert HTTPMethod.GET.value == "GET"
    assert HTTPMethod("POST") is HTTPMethod.POST
    assert DecodingErrorKind("type-mismatch") is DecodingErrorKind.TYPE_MISMATCH
