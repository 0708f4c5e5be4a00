"""FakeOrderService — in-memory order store for testing.

Lightweight implementation of OrderService for unit testing the
lifecycle manager and the CLI without an API server.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Self

from admin_console.service.errors import (
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)
from admin_console.service.session import AuthSession
from admin_console.service.types import (
    ExchangeRequest,
    ExchangeStatus,
    Order,
    OrderPage,
    OrderQuery,
    OrderStatus,
)
from admin_console.utils.time import utc_now


class FakeOrderService:
    """In-memory OrderService for testing.

    Seed orders at construction, inspect ``calls`` after test execution,
    or set ``fail_with`` to make the next call raise.
    """

    def __init__(
        self,
        orders: list[Order] | None = None,
        page_size: int = 10,
        bill: bytes = b"%PDF-1.4\n%fake bill\n",
    ) -> None:
        self._orders: dict[str, Order] = {o.id: o for o in orders or []}
        self._page_size = page_size
        self._bill = bill
        self.calls: list[tuple[str, ...]] = []
        self.fail_with: ServiceError | None = None
        self._connected = False

    def put_order(self, order: Order) -> None:
        """Insert or replace an order snapshot."""
        self._orders[order.id] = order

    def _enter(self, session: AuthSession, *call: str) -> None:
        self.calls.append(call)
        if not session.token:
            raise UnauthorizedError("No credential")
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    def _find(self, order_id: str) -> Order:
        try:
            return self._orders[order_id]
        except KeyError:
            raise NotFoundError(f"Order not found: {order_id}") from None

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def list_orders(self, session: AuthSession, query: OrderQuery) -> OrderPage:
        self._enter(session, "list_orders", str(query.page))
        matches = sorted(
            (o for o in self._orders.values() if _matches(o, query)),
            key=lambda o: (o.created_at is None, o.created_at),
            reverse=True,
        )
        pages = max(1, math.ceil(len(matches) / self._page_size))
        start = (query.page - 1) * self._page_size
        return OrderPage(
            orders=tuple(matches[start : start + self._page_size]),
            page=query.page,
            pages=pages,
        )

    async def get_order(self, session: AuthSession, order_id: str) -> Order:
        self._enter(session, "get_order", order_id)
        return self._find(order_id)

    async def mark_paid(self, session: AuthSession, order_id: str) -> Order:
        self._enter(session, "mark_paid", order_id)
        order = replace(self._find(order_id), is_paid=True, paid_at=utc_now())
        self._orders[order_id] = order
        return order

    async def mark_delivered(self, session: AuthSession, order_id: str) -> Order:
        self._enter(session, "mark_delivered", order_id)
        order = replace(
            self._find(order_id),
            status=OrderStatus.DELIVERED,
            is_delivered=True,
            delivered_at=utc_now(),
        )
        self._orders[order_id] = order
        return order

    async def update_exchange(
        self,
        session: AuthSession,
        exchange_id: str,
        status: ExchangeStatus,
    ) -> ExchangeRequest:
        self._enter(session, "update_exchange", exchange_id, status.value)
        for order in self._orders.values():
            exchange = order.exchange_request
            if exchange is not None and exchange.id == exchange_id:
                updated = replace(exchange, status=status)
                self._orders[order.id] = replace(order, exchange_request=updated)
                return updated
        raise NotFoundError(f"Exchange request not found: {exchange_id}")

    async def generate_bill(self, session: AuthSession, order_id: str) -> bytes:
        self._enter(session, "generate_bill", order_id)
        self._find(order_id)
        return self._bill

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


def _matches(order: Order, query: OrderQuery) -> bool:
    if query.status is not None and order.status != query.status:
        return False
    if query.start is not None and query.end is not None:
        if order.created_at is None or not query.start <= order.created_at <= query.end:
            return False
    if query.search:
        needle = query.search.lower()
        haystack = [order.id]
        if order.user is not None:
            haystack += [order.user.name, order.user.email]
        if not any(needle in h.lower() for h in haystack):
            return False
    return True
