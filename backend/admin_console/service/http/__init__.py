"""httpx-backed service adapters for the order/catalog API."""

from admin_console.service.http.auth import HttpAuthService
from admin_console.service.http.catalog import HttpCatalogService
from admin_console.service.http.client import HttpApiClient
from admin_console.service.http.orders import HttpOrderService

__all__ = [
    "HttpApiClient",
    "HttpAuthService",
    "HttpCatalogService",
    "HttpOrderService",
]
