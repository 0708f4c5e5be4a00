"""CatalogService protocol — abstract interface to the product API."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from admin_console.service.session import AuthSession
from admin_console.service.types import Product


@runtime_checkable
class CatalogService(Protocol):
    """Async interface to the product catalog.

    Payloads are the wire-format dicts produced by ``ProductDraft.to_payload()``.
    """

    async def list_products(self, session: AuthSession) -> list[Product]:
        """Fetch every catalog entry."""
        ...

    async def get_product(self, session: AuthSession, product_id: str) -> Product:
        """Fetch a single catalog entry."""
        ...

    async def create_product(
        self,
        session: AuthSession,
        payload: dict[str, Any],
    ) -> Product:
        """Create a catalog entry. Maps to POST /products."""
        ...

    async def update_product(
        self,
        session: AuthSession,
        product_id: str,
        payload: dict[str, Any],
    ) -> Product:
        """Replace a catalog entry. Maps to PUT /products/{id}."""
        ...

    async def delete_product(self, session: AuthSession, product_id: str) -> None:
        """Remove a catalog entry. Maps to DELETE /products/{id}."""
        ...
