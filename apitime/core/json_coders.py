"""JSON Coding Strategies — plain and portable (snake_case) coder profiles with date rules.

Invariants:
    - Both profiles share one date rule: midnight UTC encodes as YYYY-MM-DD,
      anything else as YYYY-MM-DDTHH:MM:SS.ffffff (always UTC)
    - Decoded datetimes are timezone-aware UTC; date-only is tried before full precision
    - Portable key conversion is an exact inverse: to_camel_case(to_snake_case(k)) == k
      for any camelCase key without acronyms
    - Keys without a case boundary (or without underscores on decode) pass through unchanged
    - Decode-side conversion applies only to targets keyed by aliases; dataclasses and
      BaseModels with plain snake_case attributes read wire keys as they are
    - Self-referencing containers fail encoding with ValueError

Design Decisions:
    - APIModel fields carry camelCase aliases: the alias is the language-side name,
      the attribute stays snake_case for Python callers
    - Date parsing hooks into APIModel via a wildcard before-validator, so no field
      needs its own annotation
    - Coders raise raw json / pydantic errors; classification lives in decode_diagnostics
"""

import dataclasses
import json
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Mapping, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel, to_snake

DATE_ONLY_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"

_NONE_TYPE = type(None)


# ─── Key Casing ──────────────────────────────────────────────────

def _split_underscore_affixes(key: str) -> tuple[str, str, str]:
    core = key.strip("_")
    if not core:
        return key, "", ""
    start = len(key) - len(key.lstrip("_"))
    return key[:start], core, key[start + len(core):]


def to_snake_case(key: str) -> str:
    """dueDate -> due_date, myURLValue -> my_url_value; snake keys unchanged."""
    leading, core, trailing = _split_underscore_affixes(key)
    if not any(ch.isupper() for ch in core):
        return key
    return leading + to_snake(core) + trailing


def to_camel_case(key: str) -> str:
    """due_date -> dueDate; keys without inner underscores unchanged."""
    leading, core, trailing = _split_underscore_affixes(key)
    if "_" not in core:
        return key
    return leading + to_camel(core) + trailing


def _unchanged(key: str) -> str:
    return key


def convert_keys(value: Any, convert_key: Callable[[str], str]) -> Any:
    """Apply convert_key to every mapping key at every depth."""
    if isinstance(value, dict):
        return {
            convert_key(k) if isinstance(k, str) else k: convert_keys(v, convert_key)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [convert_keys(item, convert_key) for item in value]
    return value


# ─── Dates ───────────────────────────────────────────────────────

def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_date_only(value: datetime) -> bool:
    """True when the UTC time-of-day is exactly midnight."""
    return _as_utc(value).time() == time(0)


def encode_date(value: datetime) -> str:
    utc = _as_utc(value)
    if utc.time() == time(0):
        return utc.strftime(DATE_ONLY_FORMAT)
    return utc.strftime(TIMESTAMP_FORMAT)


def parse_wire_date(value: str) -> datetime:
    """Parse a wire date string, date-only first, then full precision."""
    for fmt in (DATE_ONLY_FORMAT, TIMESTAMP_FORMAT):
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {value}")


def format_timestamp(value: datetime) -> datetime:
    """Round-trip a datetime through the full-precision wire format."""
    return parse_wire_date(_as_utc(value).strftime(TIMESTAMP_FORMAT))


def format_date_only(value: datetime) -> datetime:
    """Round-trip a datetime through the date-only wire format."""
    return datetime.combine(_as_utc(value).date(), time(0), tzinfo=timezone.utc)


def _accepts_datetime(annotation: Any) -> bool:
    if annotation is datetime:
        return True
    return any(_accepts_datetime(arg) for arg in get_args(annotation))


# ─── Models ──────────────────────────────────────────────────────

class APIModel(BaseModel):
    """Base for request and response payload models.

    Attributes are snake_case in Python and camelCase on the language side
    (the alias). Input accepts either name.
    """

    model_config = ConfigDict(alias_generator=to_camel_case, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def parse_wire_dates(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is None or not _accepts_datetime(field.annotation):
            return value
        if isinstance(value, str):
            return parse_wire_date(value)
        if isinstance(value, list):
            return [parse_wire_date(v) if isinstance(v, str) else v for v in value]
        return value


# ─── Encoding ────────────────────────────────────────────────────

def to_wire(value: Any, convert_key: Callable[[str], str] = _unchanged) -> Any:
    """Lower a Python value to JSON-compatible primitives.

    Raises TypeError for values with no JSON representation and ValueError
    for self-referencing containers.
    """
    return _lower(value, convert_key, set())


def _lower(value: Any, convert_key: Callable[[str], str], active: set[int]) -> Any:
    if isinstance(value, BaseModel):
        return _lower(value.model_dump(mode="python", by_alias=True), convert_key, active)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return _lower(fields, convert_key, active)
    if isinstance(value, Enum):
        return _lower(value.value, convert_key, active)
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, datetime):
        return encode_date(value)
    if isinstance(value, date):
        return value.strftime(DATE_ONLY_FORMAT)
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if not isinstance(value, (Mapping, list, tuple, set, frozenset)):
        raise TypeError(f"Object of type {type(value).__name__} is not JSON encodable")

    marker = id(value)
    if marker in active:
        raise ValueError("Circular reference detected")
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            wire = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError(f"Mapping keys must be str, got {type(key).__name__}")
                wire[convert_key(key)] = _lower(item, convert_key, active)
            return wire
        return [_lower(item, convert_key, active) for item in value]
    finally:
        active.discard(marker)


# ─── Decoding ────────────────────────────────────────────────────

@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _is_none_type(response_type: Any) -> bool:
    return response_type is None or response_type is _NONE_TYPE


def _reads_aliased_keys(response_type: Any, seen: set[Any]) -> bool:
    if get_origin(response_type) is None and isinstance(response_type, type):
        if response_type in seen:
            return True
        seen.add(response_type)
        if issubclass(response_type, BaseModel):
            fields = response_type.model_fields
            return all(
                (field.alias is not None or to_camel_case(name) == name)
                and _reads_aliased_keys(field.annotation, seen)
                for name, field in fields.items()
            )
        if dataclasses.is_dataclass(response_type):
            return all(
                to_camel_case(f.name) == f.name for f in dataclasses.fields(response_type)
            )
        return True
    return all(_reads_aliased_keys(arg, seen) for arg in get_args(response_type))


@lru_cache(maxsize=256)
def reads_aliased_keys(response_type: Any) -> bool:
    """False when response_type holds a model keyed by snake_case attribute names only.

    Such targets (dataclasses, BaseModels without aliases) already match the
    portable wire casing, so decode-side key conversion is skipped for them.
    """
    return _reads_aliased_keys(response_type, set())


# ─── Profiles ────────────────────────────────────────────────────

@dataclass(frozen=True)
class JSONCoder:
    """Paired encoder/decoder sharing one key-casing rule and the date rule."""

    name: str
    encode_key: Callable[[str], str] = _unchanged
    decode_key: Callable[[str], str] = _unchanged

    def encode(self, value: Any) -> bytes:
        wire = to_wire(value, self.encode_key)
        return json.dumps(
            wire, separators=(",", ":"), ensure_ascii=False, allow_nan=False,
        ).encode("utf-8")

    def decode(self, data: bytes, response_type: Any) -> Any:
        """Parse data into response_type.

        Raises json.JSONDecodeError, UnicodeDecodeError or pydantic.ValidationError.
        """
        if _is_none_type(response_type):
            if not data.strip():
                return None
            response_type = _NONE_TYPE
        decode_key = self.decode_key if reads_aliased_keys(response_type) else _unchanged
        payload = convert_keys(json.loads(data), decode_key)
        return _type_adapter(response_type).validate_python(payload)


PLAIN_CODER = JSONCoder("plain")
PORTABLE_CODER = JSONCoder("portable", encode_key=to_snake_case, decode_key=to_camel_case)
