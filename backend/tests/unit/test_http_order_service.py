"""Tests for HttpOrderService against an httpx.MockTransport.

Covers request shape (paths, methods, query string, auth header) and
the translation of HTTP failures into the ServiceError hierarchy.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from admin_console.config import ApiConfig
from admin_console.service import OrderService
from admin_console.service.errors import (
    MalformedResponseError,
    NotFoundError,
    RejectedError,
    ServiceNotConnectedError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from admin_console.service.http import HttpOrderService
from admin_console.service.session import AuthSession
from admin_console.service.types import ExchangeStatus, OrderQuery, OrderStatus
from tests.factories import admin_session, make_exchange_json, make_order_json

Handler = Callable[[httpx.Request], httpx.Response]


def _service(handler: Handler) -> HttpOrderService:
    return HttpOrderService(
        ApiConfig(base_url="http://shop.test/api"),
        transport=httpx.MockTransport(handler),
    )


class TestProtocol:
    def test_satisfies_order_service(self) -> None:
        assert isinstance(_service(lambda r: httpx.Response(200)), OrderService)


class TestLifecycle:
    async def test_call_before_connect_raises(self) -> None:
        service = _service(lambda r: httpx.Response(200, json=make_order_json()))
        with pytest.raises(ServiceNotConnectedError):
            await service.get_order(admin_session(), "order-1")

    async def test_connect_twice_is_harmless(self) -> None:
        service = _service(lambda r: httpx.Response(200, json=make_order_json()))
        await service.connect()
        await service.connect()
        await service.disconnect()
        await service.disconnect()


class TestRequests:
    """Each operation hits the documented endpoint."""

    async def test_get_order(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_order_json())

        async with _service(handler) as service:
            order = await service.get_order(admin_session("tok-1"), "order-1")

        assert order.id == "order-1"
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/orders/order-1"
        assert seen[0].headers["Authorization"] == "Bearer tok-1"

    async def test_list_orders_sends_filters(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"orders": [make_order_json()], "page": 3, "pages": 4},
            )

        query = OrderQuery(page=3, status=OrderStatus.SHIPPED, search="asha")
        async with _service(handler) as service:
            page = await service.list_orders(admin_session(), query)

        assert page.page == 3
        assert page.pages == 4
        assert seen[0].url.path == "/api/orders/all"
        params = seen[0].url.params
        assert params["pageNumber"] == "3"
        assert params["status"] == "Shipped"
        assert params["search"] == "asha"
        assert "startDate" not in params

    @pytest.mark.parametrize(
        ("method_name", "suffix"),
        [("mark_paid", "pay"), ("mark_delivered", "deliver")],
    )
    async def test_order_transitions(self, method_name: str, suffix: str) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_order_json(isPaid=True))

        async with _service(handler) as service:
            await getattr(service, method_name)(admin_session(), "order-1")

        assert seen[0].method == "PUT"
        assert seen[0].url.path == f"/api/orders/order-1/{suffix}"

    @pytest.mark.parametrize(
        "target",
        [ExchangeStatus.APPROVED, ExchangeStatus.REJECTED, ExchangeStatus.COMPLETED],
    )
    async def test_update_exchange_sends_status(self, target: ExchangeStatus) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_exchange_json(status=target.value))

        async with _service(handler) as service:
            exchange = await service.update_exchange(admin_session(), "ex-1", target)

        assert exchange.status is target
        assert len(seen) == 1
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/api/exchanges/ex-1"
        assert json.loads(seen[0].content) == {"status": target.value}

    async def test_update_exchange_unwraps_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = {"exchangeRequest": make_exchange_json(status="Completed")}
            return httpx.Response(200, json=body)

        async with _service(handler) as service:
            exchange = await service.update_exchange(
                admin_session(), "ex-1", ExchangeStatus.COMPLETED
            )
        assert exchange.status is ExchangeStatus.COMPLETED

    async def test_generate_bill_returns_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/orders/order-1/generate-bill"
            return httpx.Response(
                200,
                content=b"%PDF-1.4 bill",
                headers={"Content-Type": "application/pdf"},
            )

        async with _service(handler) as service:
            document = await service.generate_bill(admin_session(), "order-1")
        assert document == b"%PDF-1.4 bill"


class TestErrorMapping:
    """HTTP failures map onto the ServiceError hierarchy."""

    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_auth_failures(self, status_code: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"message": "Not authorized, token failed"})

        async with _service(handler) as service:
            with pytest.raises(UnauthorizedError, match="token failed"):
                await service.mark_paid(admin_session(), "order-1")

    async def test_not_found(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Order not found"})

        async with _service(handler) as service:
            with pytest.raises(NotFoundError, match="Order not found"):
                await service.get_order(admin_session(), "missing")

    async def test_rejected_carries_reason(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"message": "Order is already delivered"})

        async with _service(handler) as service:
            with pytest.raises(RejectedError) as exc_info:
                await service.mark_delivered(admin_session(), "order-1")
        assert exc_info.value.status_code == 422
        assert exc_info.value.reason == "Order is already delivered"

    async def test_rejected_plain_text_reason(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="Bad status value")

        async with _service(handler) as service:
            with pytest.raises(RejectedError) as exc_info:
                await service.update_exchange(admin_session(), "ex-1", ExchangeStatus.APPROVED)
        assert exc_info.value.reason == "Bad status value"

    async def test_server_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="upstream down")

        async with _service(handler) as service:
            with pytest.raises(ServiceUnavailableError, match="503"):
                await service.get_order(admin_session(), "order-1")

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _service(handler) as service:
            with pytest.raises(ServiceUnavailableError, match="timed out"):
                await service.get_order(admin_session(), "order-1")

    async def test_connection_refused(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _service(handler) as service:
            with pytest.raises(ServiceUnavailableError, match="Could not reach"):
                await service.list_orders(admin_session(), OrderQuery())

    async def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>ok</html>")

        async with _service(handler) as service:
            with pytest.raises(MalformedResponseError):
                await service.get_order(admin_session(), "order-1")

    async def test_wrong_document_shape(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        async with _service(handler) as service:
            with pytest.raises(MalformedResponseError):
                await service.get_order(admin_session(), "order-1")

    async def test_empty_token_never_reaches_network(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=make_order_json())

        async with _service(handler) as service:
            with pytest.raises(UnauthorizedError):
                await service.get_order(AuthSession(token=""), "order-1")
        assert calls == []


class TestRedirects:
    async def test_redirect_is_followed(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path == "/api/orders/order-1":
                return httpx.Response(
                    307, headers={"Location": "http://shop.test/api/v2/orders/order-1"}
                )
            return httpx.Response(200, json=make_order_json())

        async with _service(handler) as service:
            order = await service.get_order(admin_session(), "order-1")

        assert order.id == "order-1"
        assert seen == ["/api/orders/order-1", "/api/v2/orders/order-1"]

    async def test_redirect_without_location_is_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(300, text="Multiple Choices")

        async with _service(handler) as service:
            with pytest.raises(RejectedError, match="Unexpected redirect") as exc_info:
                await service.mark_paid(admin_session(), "order-1")
        assert exc_info.value.status_code == 300

    async def test_redirect_loop(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": str(request.url)})

        async with _service(handler) as service:
            with pytest.raises(ServiceUnavailableError, match="Redirect loop"):
                await service.get_order(admin_session(), "order-1")
