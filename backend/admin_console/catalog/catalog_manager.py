"""Catalog manager -- browse and mutate product catalog entries."""

from __future__ import annotations

import structlog

from admin_console.catalog.types import ProductDraft
from admin_console.service.catalog_service import CatalogService
from admin_console.service.session import AuthSession
from admin_console.service.types import Product

log = structlog.get_logger()


class CatalogManager:
    """Admin-gated wrapper around a CatalogService.

    Errors from the service propagate unchanged.
    """

    def __init__(self, service: CatalogService) -> None:
        self._service = service

    async def list_products(self, session: AuthSession) -> list[Product]:
        session.require_admin()
        return await self._service.list_products(session)

    async def get_product(self, session: AuthSession, product_id: str) -> Product:
        session.require_admin()
        return await self._service.get_product(session, product_id)

    async def create_product(self, session: AuthSession, draft: ProductDraft) -> Product:
        session.require_admin()
        product = await self._service.create_product(session, draft.to_payload())
        log.info("product_created", product_id=product.id, name=product.name)
        return product

    async def update_product(
        self,
        session: AuthSession,
        product_id: str,
        draft: ProductDraft,
    ) -> Product:
        session.require_admin()
        product = await self._service.update_product(
            session,
            product_id,
            draft.to_payload(),
        )
        log.info("product_updated", product_id=product_id)
        return product

    async def delete_product(self, session: AuthSession, product_id: str) -> None:
        session.require_admin()
        await self._service.delete_product(session, product_id)
        log.info("product_deleted", product_id=product_id)
