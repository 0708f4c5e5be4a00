"""Order API JSON to domain type converters.

All wire-to-Decimal and wire-to-enum conversion happens here; this is the
deserialization boundary. Unrecognized status strings are logged and
mapped to None rather than passed through as free text.

Mappers raise KeyError/TypeError/ValueError on structurally broken
documents; the HTTP adapter turns those into MalformedResponseError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

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
from admin_console.service.utils import to_decimal
from admin_console.utils.time import format_timestamp, parse_timestamp

logger = structlog.get_logger()

# Wire status string -> our OrderStatus enum
_ORDER_STATUS_MAP: dict[str, OrderStatus] = {s.value: s for s in OrderStatus}

# Wire status string -> our ExchangeStatus enum
_EXCHANGE_STATUS_MAP: dict[str, ExchangeStatus] = {s.value: s for s in ExchangeStatus}


def _timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    return parse_timestamp(str(value))


def _ref_id(value: Any) -> str:
    """Id of a populated sub-document, or the bare id string itself."""
    if isinstance(value, dict):
        return str(value.get("_id", ""))
    return "" if value is None else str(value)


def parse_order_status(raw: Any, *, order_id: str = "") -> OrderStatus | None:
    """Map a wire order status to OrderStatus, or None when unknown."""
    if raw is None:
        return None
    status = _ORDER_STATUS_MAP.get(str(raw))
    if status is None:
        logger.warning("unknown_order_status", order_id=order_id, status=raw)
    return status


def parse_exchange_status(raw: Any, *, exchange_id: str = "") -> ExchangeStatus | None:
    """Map a wire exchange status to ExchangeStatus, or None when unknown."""
    if raw is None:
        return None
    status = _EXCHANGE_STATUS_MAP.get(str(raw))
    if status is None:
        logger.warning("unknown_exchange_status", exchange_id=exchange_id, status=raw)
    return status


def json_to_exchange_request(data: dict[str, Any]) -> ExchangeRequest:
    """Convert an exchange request document to a domain ExchangeRequest."""
    exchange_id = str(data["_id"])
    return ExchangeRequest(
        id=exchange_id,
        status=parse_exchange_status(data.get("status"), exchange_id=exchange_id),
        reason=data.get("reason") or "",
        image_urls=tuple(data.get("imageUrls") or ()),
        created_at=_timestamp(data.get("createdAt")),
    )


def _json_to_customer(data: Any) -> Customer | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        return Customer(id=str(data), name="", email="")
    return Customer(
        id=_ref_id(data),
        name=data.get("name") or "",
        email=data.get("email") or "",
    )


def _json_to_address(data: dict[str, Any] | None) -> ShippingAddress | None:
    if not data:
        return None
    return ShippingAddress(
        full_name=data.get("fullName") or "",
        phone=str(data.get("phone") or ""),
        address=data.get("address") or "",
        city=data.get("city") or "",
        state=data.get("state") or "",
        postal_code=str(data.get("postalCode") or ""),
        country=data.get("country") or "",
    )


def _json_to_item(data: dict[str, Any]) -> OrderItem:
    return OrderItem(
        product_id=_ref_id(data.get("product")),
        name=data.get("name") or "",
        qty=int(data.get("qty") or 0),
        price=to_decimal(data.get("price")),
        size=data.get("size") or "",
        image=data.get("image") or "",
    )


def _json_to_payment_result(data: dict[str, Any] | None) -> PaymentResult | None:
    if not data:
        return None
    return PaymentResult(
        id=str(data.get("id") or ""),
        status=data.get("status") or "",
        update_time=str(data.get("update_time") or ""),
        email_address=data.get("email_address") or "",
    )


def _json_to_cancellation(data: Any) -> CancellationReason | None:
    if not data:
        return None
    if isinstance(data, str):
        return CancellationReason(reason=data)
    return CancellationReason(
        reason=data.get("reason") or "",
        comment=data.get("comment") or "",
    )


def json_to_order(data: dict[str, Any]) -> Order:
    """Convert an order document to a domain Order snapshot."""
    order_id = str(data["_id"])
    exchange = data.get("exchangeRequest")
    return Order(
        id=order_id,
        status=parse_order_status(data.get("status"), order_id=order_id),
        is_paid=bool(data.get("isPaid", False)),
        is_delivered=bool(data.get("isDelivered", False)),
        created_at=_timestamp(data.get("createdAt")),
        paid_at=_timestamp(data.get("paidAt")),
        delivered_at=_timestamp(data.get("deliveredAt")),
        cancelled_at=_timestamp(data.get("cancelledAt")),
        cancellation_reason=_json_to_cancellation(data.get("cancellationReason")),
        user=_json_to_customer(data.get("user")),
        shipping_address=_json_to_address(data.get("shippingAddress")),
        order_items=tuple(_json_to_item(i) for i in data.get("orderItems") or ()),
        payment_method=data.get("paymentMethod") or "",
        payment_result=_json_to_payment_result(data.get("paymentResult")),
        items_price=to_decimal(data.get("itemsPrice")),
        tax_price=to_decimal(data.get("taxPrice")),
        shipping_price=to_decimal(data.get("shippingPrice")),
        total_price=to_decimal(data.get("totalPrice")),
        exchange_request=json_to_exchange_request(exchange) if exchange else None,
    )


def json_to_order_page(data: dict[str, Any]) -> OrderPage:
    """Convert a ``{orders, page, pages}`` listing to a domain OrderPage."""
    return OrderPage(
        orders=tuple(json_to_order(o) for o in data["orders"]),
        page=int(data.get("page", 1)),
        pages=int(data.get("pages", 1)),
    )


def order_query_to_params(query: OrderQuery) -> dict[str, str]:
    """Serialize an OrderQuery to the listing endpoint's query string."""
    params: dict[str, str] = {"pageNumber": str(query.page)}
    if query.start is not None and query.end is not None:
        params["startDate"] = format_timestamp(query.start)
        params["endDate"] = format_timestamp(query.end)
    if query.status is not None:
        params["status"] = query.status.value
    if query.search:
        params["search"] = query.search
    return params


def json_to_product(data: dict[str, Any]) -> Product:
    """Convert a product document to a domain Product."""
    return Product(
        id=str(data["_id"]),
        name=data.get("name") or data.get("productName") or "",
        price=to_decimal(data.get("price", data.get("regularPrice"))),
        description=data.get("description") or "",
        category=data.get("category") or "",
        variants=tuple(
            ProductVariant(size=str(v.get("size") or ""), stock=int(v.get("stock") or 0))
            for v in data.get("variants") or ()
        ),
        images=tuple(data.get("images") or ()),
        is_new_arrival=bool(data.get("isNewArrival", False)),
        is_suggested=bool(data.get("isSuggested", False)),
        suggested_items=tuple(_ref_id(s) for s in data.get("suggestedItems") or ()),
    )
