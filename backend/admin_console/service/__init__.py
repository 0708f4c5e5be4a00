"""Order/catalog service abstraction layer.

Re-exports all public types, protocols, and errors for convenient imports:
    from admin_console.service import Order, OrderService, ServiceError
"""

from admin_console.service.auth_service import AuthService
from admin_console.service.catalog_service import CatalogService
from admin_console.service.errors import (
    MalformedResponseError,
    NotFoundError,
    RejectedError,
    ServiceError,
    ServiceNotConnectedError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from admin_console.service.order_service import OrderService
from admin_console.service.session import AuthSession, Role
from admin_console.service.types import (
    CancellationReason,
    Customer,
    ExchangeRequest,
    ExchangeStatus,
    Order,
    OrderItem,
    OrderPage,
    OrderQuery,
    OrderStatus,
    PaymentResult,
    Product,
    ProductVariant,
    ShippingAddress,
)

__all__ = [
    "AuthSession",
    "AuthService",
    "CancellationReason",
    "CatalogService",
    "Customer",
    "ExchangeRequest",
    "ExchangeStatus",
    "MalformedResponseError",
    "NotFoundError",
    "Order",
    "OrderItem",
    "OrderPage",
    "OrderQuery",
    "OrderService",
    "OrderStatus",
    "PaymentResult",
    "Product",
    "ProductVariant",
    "RejectedError",
    "Role",
    "ServiceError",
    "ServiceNotConnectedError",
    "ServiceUnavailableError",
    "ShippingAddress",
    "UnauthorizedError",
]
