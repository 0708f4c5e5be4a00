"""Order service domain types shared across the console.

Frozen dataclasses for snapshots returned by the service. Snapshots are
never mutated locally; callers refetch after a transition.
All monetary values use Decimal (never float).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    """Primary order status, as stored by the order service."""

    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class ExchangeStatus(str, Enum):
    """Exchange request status. PENDING is the initial state only."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    COMPLETED = "Completed"


# --- Value Objects (frozen) ---


@dataclass(frozen=True)
class ShippingAddress:
    """Delivery address captured at checkout."""

    full_name: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


@dataclass(frozen=True)
class Customer:
    """Customer summary embedded in an order."""

    id: str
    name: str
    email: str


@dataclass(frozen=True)
class OrderItem:
    """One line of an order."""

    product_id: str
    name: str
    qty: int
    price: Decimal
    size: str = ""
    image: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * self.qty


@dataclass(frozen=True)
class PaymentResult:
    """Payment gateway receipt, as recorded by the service."""

    id: str = ""
    status: str = ""
    update_time: str = ""
    email_address: str = ""


@dataclass(frozen=True)
class CancellationReason:
    """Structured reason attached to a cancelled order."""

    reason: str
    comment: str = ""


@dataclass(frozen=True)
class ExchangeRequest:
    """Customer-initiated exchange layered on an order.

    ``status`` is None when the service reported a value outside the
    known vocabulary.
    """

    id: str
    status: ExchangeStatus | None
    reason: str = ""
    image_urls: tuple[str, ...] = ()
    created_at: datetime | None = None


@dataclass(frozen=True)
class Order:
    """Order snapshot as last fetched from the service.

    ``status`` is None when the service omitted it or reported an
    unrecognized value. ``is_paid`` and ``is_delivered`` are independent
    axes and may disagree with ``status``.
    """

    id: str
    status: OrderStatus | None
    is_paid: bool
    is_delivered: bool
    created_at: datetime | None = None
    paid_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: CancellationReason | None = None
    user: Customer | None = None
    shipping_address: ShippingAddress | None = None
    order_items: tuple[OrderItem, ...] = ()
    payment_method: str = ""
    payment_result: PaymentResult | None = None
    items_price: Decimal = Decimal("0")
    tax_price: Decimal = Decimal("0")
    shipping_price: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    exchange_request: ExchangeRequest | None = None

    @property
    def subtotal(self) -> Decimal:
        """Sum of price * qty across all order items."""
        return sum((item.line_total for item in self.order_items), Decimal("0"))


@dataclass(frozen=True)
class OrderQuery:
    """Validated query for the order listing endpoint.

    Built by ``OrderFilters.to_query()``; the service adapter only
    serializes it.
    """

    page: int = 1
    start: datetime | None = None
    end: datetime | None = None
    status: OrderStatus | None = None
    search: str | None = None


@dataclass(frozen=True)
class OrderPage:
    """One page of the order listing."""

    orders: tuple[Order, ...]
    page: int
    pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class ProductVariant:
    """Size variant with its own stock count."""

    size: str
    stock: int


@dataclass(frozen=True)
class Product:
    """Catalog entry as returned by the product service."""

    id: str
    name: str
    price: Decimal
    description: str = ""
    category: str = ""
    variants: tuple[ProductVariant, ...] = ()
    images: tuple[str, ...] = ()
    is_new_arrival: bool = False
    is_suggested: bool = False
    suggested_items: tuple[str, ...] = field(default=())

    @property
    def total_stock(self) -> int:
        return sum(v.stock for v in self.variants)
