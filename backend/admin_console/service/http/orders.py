"""HttpOrderService — order and exchange transitions over the REST API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from admin_console.service.errors import MalformedResponseError
from admin_console.service.http.client import HttpApiClient
from admin_console.service.http.mappers import (
    json_to_exchange_request,
    json_to_order,
    json_to_order_page,
    order_query_to_params,
)
from admin_console.service.session import AuthSession
from admin_console.service.types import (
    ExchangeRequest,
    ExchangeStatus,
    Order,
    OrderPage,
    OrderQuery,
)

T = TypeVar("T")


def map_body(response: httpx.Response, body: Any, mapper: Callable[[Any], T]) -> T:
    """Apply a mapper, turning structural failures into MalformedResponseError."""
    try:
        return mapper(body)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(
            f"Unexpected document from {response.request.url.path}: {e!r}",
        ) from e


class HttpOrderService(HttpApiClient):
    """OrderService implementation backed by httpx.

    Paths are relative to ``ApiConfig.base_url``.
    """

    async def list_orders(self, session: AuthSession, query: OrderQuery) -> OrderPage:
        response = await self._request(
            "GET",
            "/orders/all",
            session,
            params=order_query_to_params(query),
        )
        return map_body(response, self._json(response), json_to_order_page)

    async def get_order(self, session: AuthSession, order_id: str) -> Order:
        response = await self._request("GET", f"/orders/{order_id}", session)
        return map_body(response, self._json(response), json_to_order)

    async def mark_paid(self, session: AuthSession, order_id: str) -> Order:
        response = await self._request("PUT", f"/orders/{order_id}/pay", session)
        return map_body(response, self._json(response), json_to_order)

    async def mark_delivered(self, session: AuthSession, order_id: str) -> Order:
        response = await self._request("PUT", f"/orders/{order_id}/deliver", session)
        return map_body(response, self._json(response), json_to_order)

    async def update_exchange(
        self,
        session: AuthSession,
        exchange_id: str,
        status: ExchangeStatus,
    ) -> ExchangeRequest:
        response = await self._request(
            "PUT",
            f"/exchanges/{exchange_id}",
            session,
            json={"status": status.value},
        )
        body = self._json(response)
        # Some deployments wrap the document: {"exchangeRequest": {...}}
        if isinstance(body, dict) and "exchangeRequest" in body:
            body = body["exchangeRequest"]
        return map_body(response, body, json_to_exchange_request)

    async def generate_bill(self, session: AuthSession, order_id: str) -> bytes:
        response = await self._request(
            "GET",
            f"/orders/{order_id}/generate-bill",
            session,
        )
        return response.content
