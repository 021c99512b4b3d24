"""Domain Types — rich types that replace bare primitives across the framework.

Invariants:
    - HTTP methods encoded as an Enum: no raw method strings in the pipeline
    - Decoding failure kinds are a closed set of five values
    - A query item is an ordered (name, value) pair; value may be None (bare flag)

Design Decisions:
    - NewType for ConfigurationKey: zero runtime cost, full type-checker support
    - str Enums: values serialize into log records and error envelopes as-is
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ConfigurationKey = NewType("ConfigurationKey", str)


# ─── Value Types ─────────────────────────────────────────────────

QueryItem = tuple[str, str | None]


# ─── Enums ───────────────────────────────────────────────────────

class HTTPMethod(str, Enum):
    """Request methods an operation may declare."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class DecodingErrorKind(str, Enum):
    """Classification of a response body that failed typed decoding."""
    MISSING_FIELD = "missing-field"
    MISSING_VALUE = "missing-value"
    TYPE_MISMATCH = "type-mismatch"
    CORRUPTED_DATA = "corrupted-data"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable label used in diagnostics blocks."""
        return _KIND_LABELS[self]


_KIND_LABELS = {
    DecodingErrorKind.MISSING_FIELD: "Missing Key",
    DecodingErrorKind.MISSING_VALUE: "Missing Value",
    DecodingErrorKind.TYPE_MISMATCH: "Type Mismatch",
    DecodingErrorKind.CORRUPTED_DATA: "Data Corruption",
    DecodingErrorKind.UNKNOWN: "Unknown Decoding Error",
}
