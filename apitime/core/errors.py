"""Error Hierarchy — typed, categorized exceptions for every operation failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors are terminal for the call: nothing in the pipeline is retried
    - HTTPError carries the full response header map but never the body
    - to_dict() produces the same envelope shape for every error

Design Decisions:
    - Single hierarchy with APITimeError base: callers catch one type for all failures
    - ErrorContext as dataclass: call metadata travels with the error, not with the logger
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from apitime.core.domain_types import DecodingErrorKind


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories, one per pipeline stage."""
    CONFIGURATION = "configuration"
    ENCODING = "encoding"
    TRANSPORT = "transport"
    INVALID_RESPONSE = "invalid_response"
    HTTP_STATUS = "http_status"
    DECODING = "decoding"


@dataclass
class ErrorContext:
    """Call metadata attached to an error for debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    configuration_key: str | None = None
    method: str | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None


class APITimeError(Exception):
    """Base exception for all operation failures."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a diagnostic envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "configuration_key": self.context.configuration_key,
                    "method": self.context.method,
                    "url": self.context.url,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Caller Errors ──────────────────────────────────────────────

class ConfigurationNotFoundError(APITimeError):
    """No API configuration registered under the requested key."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"API configuration not found for key: {key}",
            "CONFIGURATION_NOT_FOUND", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, context,
        )
        self.key = key


class EncodingError(APITimeError):
    """Request body could not be serialized."""
    def __init__(
        self, message: str, cause: Exception | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Failed to encode request body: {message}",
            "ENCODING_ERROR", ErrorCategory.ENCODING,
            ErrorSeverity.ERROR, context,
        )
        self.cause = cause


# ─── Exchange Errors ────────────────────────────────────────────

class TransportError(APITimeError):
    """The transport could not complete the exchange."""
    def __init__(
        self, message: str, cause: Exception | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Transport failure: {message}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
            ErrorSeverity.CRITICAL, context,
        )
        self.cause = cause


class InvalidResponseError(APITimeError):
    """Transport returned something that is not an HTTP response."""
    def __init__(self, description: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid response: {description}",
            "INVALID_RESPONSE", ErrorCategory.INVALID_RESPONSE,
            ErrorSeverity.CRITICAL, context,
        )
        self.description = description


class HTTPError(APITimeError):
    """Valid HTTP exchange with a status outside 200-299."""
    def __init__(
        self, status_code: int, headers: dict[str, str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"HTTP error with status code: {status_code}",
            "HTTP_ERROR", ErrorCategory.HTTP_STATUS,
            ErrorSeverity.ERROR, context,
        )
        self.status_code = status_code
        self.headers = headers


class DecodingError(APITimeError):
    """Response body could not be decoded into the declared type."""
    def __init__(
        self,
        kind: DecodingErrorKind,
        path: str,
        description: str,
        raw_snippet: str | None = None,
        context: ErrorContext | None = None,
    ):
        location = path or "Root Level"
        super().__init__(
            f"{kind.label} at {location}: {description}",
            "DECODING_ERROR", ErrorCategory.DECODING,
            ErrorSeverity.ERROR, context,
        )
        self.kind = kind
        self.path = path
        self.description = description
        self.raw_snippet = raw_snippet
