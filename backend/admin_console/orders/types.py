"""Order lifecycle types shared across the console.

Enums for the closed action/label vocabularies, frozen dataclasses for
results, and a Pydantic model for validating listing filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from admin_console.service.types import ExchangeStatus, OrderQuery, OrderStatus
from admin_console.utils.time import end_of_day, start_of_day


class OrderAction(str, Enum):
    """Staff-triggered order transitions.

    Lookup by value is lenient about case and underscores, so
    "mark_paid" and "markpaid" both resolve to MARK_PAID.
    """

    MARK_PAID = "MarkPaid"
    MARK_DELIVERED = "MarkDelivered"

    @classmethod
    def _missing_(cls, value: object) -> OrderAction | None:
        if not isinstance(value, str):
            return None
        key = value.replace("_", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


class StatusLabel(str, Enum):
    """Display label for an order; the value is the text shown to staff."""

    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    EXCHANGE_PENDING = "Exchange Pending"
    EXCHANGE_APPROVED = "Exchange Approved"
    EXCHANGE_REJECTED = "Exchange Rejected"
    EXCHANGE_COMPLETED = "Exchange Completed"


TERMINAL_ORDER_STATUSES = frozenset(
    {
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)

TERMINAL_EXCHANGE_STATUSES = frozenset(
    {
        ExchangeStatus.REJECTED,
        ExchangeStatus.COMPLETED,
    }
)


class TransitionOutcome(str, Enum):
    """Tag on a TransitionResult."""

    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    INVALID_TRANSITION = "invalid_transition"
    REJECTED = "rejected"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class TransitionResult:
    """Result of requesting an order or exchange transition.

    ``reason`` carries the service's explanation for REJECTED outcomes.
    On SUCCESS the caller must refetch; nothing is updated locally.
    """

    target_id: str
    outcome: TransitionOutcome
    error: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is TransitionOutcome.SUCCESS


class InvalidFilterError(ValueError):
    """Raised when order listing filters fail local validation."""


class OrderFilters(BaseModel):
    """Validated filters for the order listing."""

    page: int = Field(default=1, ge=1)
    start_date: date | None = None
    end_date: date | None = None
    status: OrderStatus | None = None
    search: str | None = None

    @field_validator("search")
    @classmethod
    def normalize_search(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def validate_date_range(self) -> OrderFilters:
        """A date range needs both ends, in order."""
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("date range requires both start_date and end_date")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ValueError("end_date must not be before start_date")
        return self

    def to_query(self) -> OrderQuery:
        """Widen the date range to whole UTC days and build the service query."""
        return OrderQuery(
            page=self.page,
            start=start_of_day(self.start_date) if self.start_date else None,
            end=end_of_day(self.end_date) if self.end_date else None,
            status=self.status,
            search=self.search,
        )
