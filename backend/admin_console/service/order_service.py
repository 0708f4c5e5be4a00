"""OrderService protocol — abstract interface to the order API.

All order service implementations (HTTP, fake) must satisfy this protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from admin_console.service.session import AuthSession
from admin_console.service.types import (
    ExchangeRequest,
    ExchangeStatus,
    Order,
    OrderPage,
    OrderQuery,
)


@runtime_checkable
class OrderService(Protocol):
    """Async interface to the order and exchange resources.

    Every call carries the caller's session. Implementations raise
    ServiceError subclasses and never retry.
    """

    async def list_orders(self, session: AuthSession, query: OrderQuery) -> OrderPage:
        """Fetch one page of orders, filtered server-side."""
        ...

    async def get_order(self, session: AuthSession, order_id: str) -> Order:
        """Fetch a single order snapshot."""
        ...

    async def mark_paid(self, session: AuthSession, order_id: str) -> Order:
        """Flag an order as paid. Maps to PUT /orders/{id}/pay."""
        ...

    async def mark_delivered(self, session: AuthSession, order_id: str) -> Order:
        """Flag an order as delivered. Maps to PUT /orders/{id}/deliver."""
        ...

    async def update_exchange(
        self,
        session: AuthSession,
        exchange_id: str,
        status: ExchangeStatus,
    ) -> ExchangeRequest:
        """Set an exchange request's status. Maps to PUT /exchanges/{id}."""
        ...

    async def generate_bill(self, session: AuthSession, order_id: str) -> bytes:
        """Download the rendered bill document for an order."""
        ...
