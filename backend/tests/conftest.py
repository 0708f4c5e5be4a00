"""Shared test fixtures for admin-console."""

from __future__ import annotations

import pytest

from admin_console.orders import OrderLifecycleManager
from admin_console.service.fake import FakeCatalogService, FakeOrderService
from admin_console.service.session import AuthSession
from tests.factories import admin_session, make_order, make_product


@pytest.fixture
def session() -> AuthSession:
    """An admin session."""
    return admin_session()


@pytest.fixture
def order_service() -> FakeOrderService:
    """FakeOrderService seeded with one processing order."""
    return FakeOrderService([make_order()])


@pytest.fixture
def lifecycle(order_service: FakeOrderService) -> OrderLifecycleManager:
    return OrderLifecycleManager(order_service)


@pytest.fixture
def catalog_service() -> FakeCatalogService:
    """FakeCatalogService seeded with one product."""
    return FakeCatalogService([make_product()])
