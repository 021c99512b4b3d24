"""Operation Runner — resolves, builds, sends, validates and decodes one operation.

Invariants:
    - Stages run in order: resolve endpoint → build request → invoke transport →
      validate status → decode body; none is skipped, none is retried
    - Suspension happens only at the registry lookup and the transport call
    - A missing configuration key fails before the transport is touched
    - Status 200-299 inclusive passes; anything else raises HTTPError with the
      response headers and without parsing the body
    - Every failure is logged with its diagnostics where it is detected, then
      re-raised unchanged (the runner adds one summary line at its boundary)
    - Exceptions a transport raises that are not APITimeError become TransportError

Design Decisions:
    - Registry and transport injected: the runner holds no module-level state
    - build_request() and resolve_endpoint() are public for previews and tests
    - Per-call state (draft request, decoded value, diagnostics) lives in locals only
"""

import logging
from typing import Any, TypeVar

from apitime.config import Settings, get_settings
from apitime.core.decode_diagnostics import format_diagnostics, to_decoding_error
from apitime.core.endpoint import Endpoint
from apitime.core.errors import (
    APITimeError,
    ConfigurationNotFoundError,
    ErrorContext,
    HTTPError,
    InvalidResponseError,
    TransportError,
)
from apitime.core.operation import Operation
from apitime.core.protocols import Transport, TransportResponse
from apitime.core.request_builder import DraftRequest, RequestBuilder
from apitime.infrastructure.configuration_registry import ConfigurationRegistry

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")


def _is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


class OperationRunner:
    """Executes operations against a registry and a transport."""

    def __init__(
        self,
        registry: ConfigurationRegistry,
        transport: Transport,
        settings: Settings | None = None,
    ):
        self.registry = registry
        self.transport = transport
        self.settings = settings or get_settings()

    async def execute(self, operation: Operation[Any, ResponseT]) -> ResponseT:
        """Run the full pipeline and return the decoded response."""
        logger.debug(
            f"Executing {operation.name}",
            extra={"operation": operation.name, "configuration_key": operation.configuration_key},
        )
        context = ErrorContext(
            operation=operation.name,
            configuration_key=operation.configuration_key,
            method=operation.method.value,
        )
        try:
            request = await self.build_request(operation)
            context.url = str(request.url)
            response = await self._invoke(request)
            self._validate_status(response)
            return self._decode(operation, response.body)
        except APITimeError as e:
            self._attach_context(e, context)
            logger.error(
                f"Failed to execute {operation.name}: {e.message}",
                extra={
                    "operation": operation.name,
                    "configuration_key": operation.configuration_key,
                    "error_code": e.code,
                    "url": context.url,
                },
            )
            raise

    async def resolve_endpoint(self, operation: Operation) -> Endpoint:
        configuration = await self.registry.get(operation.configuration_key)
        if configuration is None:
            logger.error(
                f"API configuration not found for key: {operation.configuration_key}",
                extra={
                    "configuration_key": operation.configuration_key,
                    "error_code": "CONFIGURATION_NOT_FOUND",
                },
            )
            raise ConfigurationNotFoundError(operation.configuration_key)
        return Endpoint(operation.method, configuration.base_url, operation.path)

    async def build_request(self, operation: Operation) -> DraftRequest:
        """Resolve the endpoint and apply the builder passes to a fresh draft."""
        endpoint = await self.resolve_endpoint(operation)
        request = DraftRequest(method=operation.method, url=endpoint.url)
        return RequestBuilder(operation.encoder).configure(request, operation.request_data)

    async def _invoke(self, request: DraftRequest) -> TransportResponse:
        try:
            response = await self.transport.send(request)
        except APITimeError:
            raise
        except Exception as e:
            logger.error(
                f"Transport {type(self.transport).__name__} failed: {e}",
                extra={"error_code": "TRANSPORT_ERROR", "url": str(request.url)},
            )
            raise TransportError(str(e) or type(e).__name__, cause=e) from e
        if not isinstance(response, TransportResponse):
            description = (
                f"Transport returned {type(response).__name__}, not a TransportResponse"
            )
            logger.error(description, extra={"error_code": "INVALID_RESPONSE"})
            raise InvalidResponseError(description)
        if not isinstance(response.status_code, int) or not 100 <= response.status_code <= 599:
            description = f"Status code {response.status_code!r} is not an HTTP status"
            logger.error(description, extra={"error_code": "INVALID_RESPONSE"})
            raise InvalidResponseError(description)
        return response

    def _validate_status(self, response: TransportResponse) -> None:
        if _is_success(response.status_code):
            return
        headers = {str(k): str(v) for k, v in response.headers.items()}
        diagnostics = [
            ("Error Type", "HTTP Error"),
            ("Status Code", str(response.status_code)),
            ("Headers", repr(headers)),
        ]
        logger.error(
            format_diagnostics(diagnostics),
            extra={"status_code": response.status_code, "error_code": "HTTP_ERROR"},
        )
        raise HTTPError(response.status_code, headers)

    def _decode(self, operation: Operation[Any, ResponseT], data: bytes) -> ResponseT:
        logger.debug(
            f"Attempting to decode raw JSON: {data.decode('utf-8', errors='replace')}",
            extra={"operation": operation.name},
        )
        try:
            decoded = operation.decoder.decode(data, operation.response_type)
        except Exception as e:
            decoding_error, diagnostics = to_decoding_error(
                e, data, self.settings.raw_snippet_limit,
            )
            logger.error(
                format_diagnostics(diagnostics),
                extra={
                    "operation": operation.name,
                    "error_code": decoding_error.code,
                    "path": decoding_error.path,
                },
            )
            raise decoding_error from e
        logger.debug(f"Decoded response: {decoded!r}", extra={"operation": operation.name})
        return decoded

    @staticmethod
    def _attach_context(error: APITimeError, context: ErrorContext) -> None:
        error.context.operation = context.operation
        error.context.configuration_key = context.configuration_key
        error.context.method = context.method
        error.context.url = context.url


async def execute_operation(
    operation: Operation[Any, ResponseT],
    *,
    registry: ConfigurationRegistry,
    transport: Transport,
) -> ResponseT:
    return await OperationRunner(registry, transport).execute(operation)
