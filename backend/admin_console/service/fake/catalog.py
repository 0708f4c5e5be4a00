"""FakeCatalogService — in-memory product catalog for testing."""

from __future__ import annotations

import uuid
from typing import Any, Self

from admin_console.service.errors import NotFoundError, UnauthorizedError
from admin_console.service.http.mappers import json_to_product
from admin_console.service.session import AuthSession
from admin_console.service.types import Product


class FakeCatalogService:
    """In-memory CatalogService. Stored payloads are inspectable."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[str, Product] = {p.id: p for p in products or []}
        self.payloads: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

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

    @staticmethod
    def _check(session: AuthSession) -> None:
        if not session.token:
            raise UnauthorizedError("No credential")

    def _find(self, product_id: str) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise NotFoundError(f"Product not found: {product_id}") from None

    async def list_products(self, session: AuthSession) -> list[Product]:
        self._check(session)
        return list(self._products.values())

    async def get_product(self, session: AuthSession, product_id: str) -> Product:
        self._check(session)
        return self._find(product_id)

    async def create_product(
        self,
        session: AuthSession,
        payload: dict[str, Any],
    ) -> Product:
        self._check(session)
        self.payloads.append(payload)
        product = json_to_product({"_id": uuid.uuid4().hex, **payload})
        self._products[product.id] = product
        return product

    async def update_product(
        self,
        session: AuthSession,
        product_id: str,
        payload: dict[str, Any],
    ) -> Product:
        self._check(session)
        self._find(product_id)
        self.payloads.append(payload)
        product = json_to_product({"_id": product_id, **payload})
        self._products[product_id] = product
        return product

    async def delete_product(self, session: AuthSession, product_id: str) -> None:
        self._check(session)
        self._find(product_id)
        del self._products[product_id]
        self.deleted.append(product_id)
