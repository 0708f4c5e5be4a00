"""HttpApiClient — shared httpx plumbing for the order/catalog API.

Owns the httpx.AsyncClient lifecycle and translates transport failures
and HTTP status codes into the ServiceError hierarchy. Concrete services
subclass it and only deal with paths and mapping.
"""

from __future__ import annotations

import asyncio
from typing import Any, Self

import httpx
import structlog

from admin_console.config import ApiConfig
from admin_console.service.errors import (
    MalformedResponseError,
    NotFoundError,
    RejectedError,
    ServiceNotConnectedError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from admin_console.service.session import AuthSession

logger = structlog.get_logger()


def _error_reason(response: httpx.Response) -> str:
    """Best-effort human reason from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    text = response.text.strip()
    return text or response.reason_phrase or f"HTTP {response.status_code}"


def raise_for_status(response: httpx.Response) -> None:
    """Translate a non-2xx response to our error hierarchy."""
    status = response.status_code
    if 200 <= status < 300:
        return
    reason = _error_reason(response)
    if status in (401, 403):
        raise UnauthorizedError(f"Authentication failed: {reason}")
    if status == 404:
        raise NotFoundError(reason)
    if 300 <= status < 400:
        # Redirects are followed; one that reaches here had no usable Location
        raise RejectedError(status, f"Unexpected redirect: {reason}")
    if 400 <= status < 500:
        raise RejectedError(status, reason)
    raise ServiceUnavailableError(f"Service error {status}: {reason}")


class HttpApiClient:
    """Base class for httpx-backed service adapters.

    Supports ``async with`` for lifecycle management. A custom transport
    may be injected (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lifecycle_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Open the underlying HTTP connection pool."""
        async with self._lifecycle_lock:
            if self._client is not None:
                logger.warning("api_client_already_connected", base_url=self._config.base_url)
                return
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("api_client_connected", base_url=self._config.base_url)

    async def disconnect(self) -> None:
        """Close the connection pool."""
        async with self._lifecycle_lock:
            if self._client is None:
                return
            await self._client.aclose()
            self._client = None
            logger.debug("api_client_disconnected")

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.disconnect()

    def _require_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ServiceNotConnectedError("Not connected. Call connect() first.")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        session: AuthSession | None = None,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request and return the 2xx response.

        Raises:
            UnauthorizedError: No token on the session, or HTTP 401/403.
            NotFoundError: HTTP 404.
            RejectedError: Any other 4xx, or a redirect that cannot be followed.
            ServiceUnavailableError: Transport failure, timeout, redirect loop, or 5xx.
        """
        client = self._require_connected()
        headers: dict[str, str] = {}
        if session is not None:
            if not session.token:
                raise UnauthorizedError("No credential. Log in or set ADMIN_API__TOKEN.")
            headers.update(session.headers)

        try:
            response = await client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError(f"Request timed out: {method} {path}") from e
        except httpx.TooManyRedirects as e:
            raise ServiceUnavailableError(f"Redirect loop: {method} {path}") from e
        except httpx.TransportError as e:
            raise ServiceUnavailableError(f"Could not reach service: {e}") from e

        logger.debug(
            "api_response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        raise_for_status(response)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Expected JSON from {response.request.url.path}",
            ) from e
