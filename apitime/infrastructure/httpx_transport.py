"""HTTPX Transport — default Transport implementation over httpx.AsyncClient.

Invariants:
    - One send() is one request/response exchange: no retry, no backoff
    - Timeouts come from settings (http_timeout_seconds); the core has no timeout policy
    - All httpx failures mapped to TransportError (core/errors.py)
    - Non-2xx statuses are returned, not raised: status validation belongs to the runner

Design Decisions:
    - Wrapper over raw client: error mapping isolated from the runner
    - Accepts an injected AsyncClient (tests pass httpx.MockTransport-backed clients)
    - Owns and closes only the client it created itself
"""

import logging

import httpx

from apitime.config import Settings, get_settings
from apitime.core.errors import TransportError
from apitime.core.protocols import TransportResponse
from apitime.core.request_builder import DraftRequest

logger = logging.getLogger(__name__)


def build_async_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with the framework's defaults."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers={"User-Agent": settings.user_agent},
    )


class HTTPXTransport:
    """Sends draft requests through httpx and maps its errors."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ):
        self._owns_client = client is None
        self.client = client or build_async_client(settings)

    async def send(self, request: DraftRequest) -> TransportResponse:
        try:
            response = await self.client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            logger.error(
                f"HTTP timeout: {request.method.value} {request.url}",
                extra={"error_code": "TRANSPORT_ERROR", "url": str(request.url)},
            )
            raise TransportError(f"timeout ({type(e).__name__})", cause=e) from e
        except httpx.HTTPError as e:
            logger.error(
                f"HTTP transport error: {request.method.value} {request.url}: {e}",
                extra={"error_code": "TRANSPORT_ERROR", "url": str(request.url)},
            )
            raise TransportError(str(e) or type(e).__name__, cause=e) from e

        logger.debug(
            f"HTTP {response.status_code} from {request.method.value} {request.url}",
            extra={"status_code": response.status_code, "url": str(request.url)},
        )
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HTTPXTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
