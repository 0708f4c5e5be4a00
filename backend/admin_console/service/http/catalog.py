"""HttpCatalogService — product catalog CRUD over the REST API."""

from __future__ import annotations

from typing import Any

from admin_console.service.http.client import HttpApiClient
from admin_console.service.http.mappers import json_to_product
from admin_console.service.http.orders import map_body
from admin_console.service.session import AuthSession
from admin_console.service.types import Product


def _products_from_listing(body: Any) -> list[Product]:
    # GET /products answers {"products": [...]}; older builds return a bare list
    items = body["products"] if isinstance(body, dict) else body
    return [json_to_product(p) for p in items]


class HttpCatalogService(HttpApiClient):
    """CatalogService implementation backed by httpx."""

    async def list_products(self, session: AuthSession) -> list[Product]:
        response = await self._request("GET", "/products", session)
        return map_body(response, self._json(response), _products_from_listing)

    async def get_product(self, session: AuthSession, product_id: str) -> Product:
        response = await self._request("GET", f"/products/{product_id}", session)
        return map_body(response, self._json(response), json_to_product)

    async def create_product(
        self,
        session: AuthSession,
        payload: dict[str, Any],
    ) -> Product:
        response = await self._request("POST", "/products", session, json=payload)
        return map_body(response, self._json(response), json_to_product)

    async def update_product(
        self,
        session: AuthSession,
        product_id: str,
        payload: dict[str, Any],
    ) -> Product:
        response = await self._request(
            "PUT",
            f"/products/{product_id}",
            session,
            json=payload,
        )
        return map_body(response, self._json(response), json_to_product)

    async def delete_product(self, session: AuthSession, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}", session)
