"""Decode Diagnostics — classify typed-decoding failures into DecodingError.

Invariants:
    - Every failure maps to exactly one DecodingErrorKind (first reported error wins)
    - Path is the dot-joined chain of container keys and indices ("" for root level);
      for a missing key it stops at the containing object and the key is named
      in the description
    - Raw snippet is the response body, cut to `limit` characters with a
      "... (truncated)" suffix when longer
    - Pure functions only: no logging, no IO

Design Decisions:
    - Classification keys off pydantic error `type` strings, with a null input
      checked first so a null in a required slot reads as a missing value
    - Diagnostics kept as ordered (label, value) pairs; the shell renders them
"""

import json
from typing import Any

from pydantic import ValidationError

from apitime.core.domain_types import DecodingErrorKind
from apitime.core.errors import DecodingError

TRUNCATION_SUFFIX = "... (truncated)"

_MISSING_FIELD_TYPES = frozenset({
    "missing",
    "missing_argument",
    "missing_keyword_only_argument",
    "missing_positional_only_argument",
})

_CORRUPTED_TYPES = frozenset({
    "value_error",
    "assertion_error",
    "enum",
    "literal_error",
    "json_invalid",
    "string_too_short",
    "string_too_long",
    "string_pattern_mismatch",
    "too_short",
    "too_long",
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "multiple_of",
    "url_parsing",
    "uuid_parsing",
})

_TYPE_MISMATCH_EXTRA = frozenset({
    "is_instance_of",
    "is_subclass_of",
    "model_attributes_type",
    "dataclass_exact_type",
    "union_tag_invalid",
})

_NO_INPUT = object()


def raw_snippet(data: bytes, limit: int = 1000) -> str:
    text = data.decode("utf-8", errors="replace")
    if len(text) > limit:
        return text[:limit] + TRUNCATION_SUFFIX
    return text


def join_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def classify_validation_error(error: dict[str, Any]) -> DecodingErrorKind:
    """Map one pydantic error entry to a decoding failure kind."""
    error_type = error.get("type", "")
    if error_type in _MISSING_FIELD_TYPES:
        return DecodingErrorKind.MISSING_FIELD
    if error.get("input", _NO_INPUT) is None:
        return DecodingErrorKind.MISSING_VALUE
    if error_type in _CORRUPTED_TYPES:
        return DecodingErrorKind.CORRUPTED_DATA
    if (
        error_type.endswith("_type")
        or error_type.endswith("_parsing")
        or error_type in _TYPE_MISMATCH_EXTRA
    ):
        return DecodingErrorKind.TYPE_MISMATCH
    return DecodingErrorKind.UNKNOWN


def _error_type_label(kind: DecodingErrorKind, entry: dict[str, Any]) -> str:
    loc = entry.get("loc", ())
    if kind == DecodingErrorKind.MISSING_FIELD and loc:
        return f"{kind.label} '{loc[-1]}'"
    if kind == DecodingErrorKind.TYPE_MISMATCH:
        return f"{kind.label} ({entry.get('type', '')})"
    return kind.label


def to_decoding_error(
    error: Exception, data: bytes, limit: int = 1000,
) -> tuple[DecodingError, list[tuple[str, str]]]:
    """Build the DecodingError and its diagnostics block for a decode failure."""
    snippet = raw_snippet(data, limit)

    if isinstance(error, ValidationError):
        entries = error.errors()
        first = entries[0]
        kind = classify_validation_error(first)
        loc = tuple(first.get("loc", ()))
        description = first.get("msg", str(error))
        if kind == DecodingErrorKind.MISSING_FIELD and loc:
            loc, key = loc[:-1], loc[-1]
            description = f"No value associated with key '{key}' ({description})"
        path = join_path(loc)
        if len(entries) > 1:
            description += f" (+{len(entries) - 1} more errors)"
        label = _error_type_label(kind, first)
    elif isinstance(error, json.JSONDecodeError):
        kind, path, label = DecodingErrorKind.CORRUPTED_DATA, "", DecodingErrorKind.CORRUPTED_DATA.label
        description = (
            f"The given data was not valid JSON: {error.msg} "
            f"(line {error.lineno}, column {error.colno})"
        )
    elif isinstance(error, UnicodeDecodeError):
        kind, path, label = DecodingErrorKind.CORRUPTED_DATA, "", DecodingErrorKind.CORRUPTED_DATA.label
        description = f"The given data was not valid UTF-8: {error.reason}"
    else:
        kind, path, label = DecodingErrorKind.UNKNOWN, "", DecodingErrorKind.UNKNOWN.label
        description = str(error) or type(error).__name__

    decoding_error = DecodingError(kind, path, description, snippet)
    diagnostics = [
        ("Error Type", label),
        ("Location", path or "Root Level"),
        ("Description", description),
        ("Underlying Error", f"{type(error).__name__}: {error}"),
        ("Raw JSON", snippet),
    ]
    return decoding_error, diagnostics


def format_diagnostics(diagnostics: list[tuple[str, str]]) -> str:
    return "\n".join(f"{label}:\n\t{value}" for label, value in diagnostics)
