"""In-memory service fakes for tests and offline use."""

from admin_console.service.fake.auth import FakeAuthService
from admin_console.service.fake.catalog import FakeCatalogService
from admin_console.service.fake.orders import FakeOrderService

__all__ = ["FakeAuthService", "FakeCatalogService", "FakeOrderService"]
