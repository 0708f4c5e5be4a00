"""Order lifecycle manager -- validates staff intents and submits transitions.

Stateless: every operation is a function of its inputs plus at most one
outbound call to the order service. Local validation failures never reach
the network. Nothing is cached or optimistically mutated; callers refetch
after a successful transition. All lifecycle events logged via structlog.
"""

from __future__ import annotations

from datetime import date

import structlog
from pydantic import ValidationError

from admin_console.orders.state_machine import (
    ExchangeStateMachine,
    InvalidTransitionError,
    available_actions,
    available_exchange_targets,
    check_order_action,
)
from admin_console.orders.types import (
    InvalidFilterError,
    OrderAction,
    OrderFilters,
    StatusLabel,
    TransitionOutcome,
    TransitionResult,
)
from admin_console.service.errors import (
    MalformedResponseError,
    NotFoundError,
    RejectedError,
    ServiceError,
    UnauthorizedError,
)
from admin_console.service.order_service import OrderService
from admin_console.service.session import AuthSession
from admin_console.service.types import (
    ExchangeRequest,
    ExchangeStatus,
    Order,
    OrderPage,
    OrderStatus,
)

log = structlog.get_logger()

_EXCHANGE_LABELS: dict[ExchangeStatus, StatusLabel] = {
    ExchangeStatus.PENDING: StatusLabel.EXCHANGE_PENDING,
    ExchangeStatus.APPROVED: StatusLabel.EXCHANGE_APPROVED,
    ExchangeStatus.REJECTED: StatusLabel.EXCHANGE_REJECTED,
    ExchangeStatus.COMPLETED: StatusLabel.EXCHANGE_COMPLETED,
}

_ORDER_LABELS: dict[OrderStatus, StatusLabel] = {
    OrderStatus.PROCESSING: StatusLabel.PROCESSING,
    OrderStatus.SHIPPED: StatusLabel.SHIPPED,
    OrderStatus.DELIVERED: StatusLabel.DELIVERED,
    OrderStatus.CANCELLED: StatusLabel.CANCELLED,
}


def classify_status(order: Order) -> StatusLabel:
    """Display label for an order snapshot.

    An exchange request with a known status takes precedence over the
    order's own status. Otherwise the order status is used, with
    PROCESSING for a missing or unrecognized value.
    """
    exchange = order.exchange_request
    if exchange is not None and exchange.status is not None:
        return _EXCHANGE_LABELS[exchange.status]
    if order.status is None:
        return StatusLabel.PROCESSING
    return _ORDER_LABELS.get(order.status, StatusLabel.PROCESSING)


def find_status_conflicts(order: Order) -> list[str]:
    """Disagreements between ``status`` and the legacy delivery/payment flags.

    ``status`` is primary; conflicts are reported, never resolved.
    """
    conflicts: list[str] = []
    delivered = order.status is OrderStatus.DELIVERED
    if order.is_delivered and not delivered:
        conflicts.append(
            f"is_delivered=True but status={_status_text(order.status)}",
        )
    if delivered and not order.is_delivered:
        conflicts.append("status=Delivered but is_delivered=False")
    if order.status is OrderStatus.CANCELLED and order.cancelled_at is None:
        conflicts.append("status=Cancelled but cancelled_at is missing")
    if order.status is not OrderStatus.CANCELLED and order.cancelled_at is not None:
        conflicts.append(
            f"cancelled_at is set but status={_status_text(order.status)}",
        )
    return conflicts


def _status_text(status: OrderStatus | None) -> str:
    return status.value if status is not None else "unknown"


def _failure(target_id: str, exc: ServiceError) -> TransitionResult:
    """Tag a service failure."""
    if isinstance(exc, UnauthorizedError):
        return TransitionResult(target_id, TransitionOutcome.UNAUTHORIZED, str(exc))
    if isinstance(exc, NotFoundError):
        return TransitionResult(target_id, TransitionOutcome.NOT_FOUND, str(exc))
    if isinstance(exc, RejectedError):
        return TransitionResult(
            target_id,
            TransitionOutcome.REJECTED,
            str(exc),
            reason=exc.reason,
        )
    return TransitionResult(target_id, TransitionOutcome.SERVICE_UNAVAILABLE, str(exc))


class OrderLifecycleManager:
    """Validates and applies order and exchange transitions.

    Wraps an OrderService. Holds no mutable state; one manager may serve
    any number of sessions.
    """

    def __init__(self, service: OrderService) -> None:
        self._service = service

    classify_status = staticmethod(classify_status)
    find_status_conflicts = staticmethod(find_status_conflicts)
    available_actions = staticmethod(available_actions)

    @staticmethod
    def available_exchange_targets(exchange: ExchangeRequest) -> frozenset[ExchangeStatus]:
        return available_exchange_targets(exchange.status)

    async def request_order_transition(
        self,
        session: AuthSession,
        order: Order,
        action: OrderAction | str,
    ) -> TransitionResult:
        """Submit MARK_PAID or MARK_DELIVERED for an order snapshot.

        Preconditions are checked against ``order`` before any call, so an
        illegal request returns INVALID_TRANSITION without touching the
        network.
        """
        try:
            session.require_admin()
        except UnauthorizedError as exc:
            log.warning("order_transition_unauthorized", order_id=order.id)
            return TransitionResult(order.id, TransitionOutcome.UNAUTHORIZED, str(exc))

        try:
            action = OrderAction(action)
            check_order_action(order, action)
        except ValueError:
            log.warning("order_transition_invalid", order_id=order.id, action=str(action))
            return TransitionResult(
                order.id,
                TransitionOutcome.INVALID_TRANSITION,
                f"Unknown order action: {action!r}",
            )
        except InvalidTransitionError as exc:
            log.warning(
                "order_transition_invalid",
                order_id=order.id,
                action=action.value,
                status=_status_text(order.status),
                is_paid=order.is_paid,
            )
            return TransitionResult(
                order.id, TransitionOutcome.INVALID_TRANSITION, str(exc)
            )

        log.info("order_transition_submitted", order_id=order.id, action=action.value)
        try:
            if action is OrderAction.MARK_PAID:
                await self._service.mark_paid(session, order.id)
            else:
                await self._service.mark_delivered(session, order.id)
        except MalformedResponseError as exc:
            # 2xx: the service applied it; the refetch will show the result
            log.warning(
                "order_transition_response_unreadable", order_id=order.id, error=str(exc)
            )
        except ServiceError as exc:
            log.error(
                "order_transition_failed",
                order_id=order.id,
                action=action.value,
                error=str(exc),
            )
            return _failure(order.id, exc)

        log.info("order_transition_applied", order_id=order.id, action=action.value)
        return TransitionResult(order.id, TransitionOutcome.SUCCESS)

    async def request_exchange_transition(
        self,
        session: AuthSession,
        exchange: ExchangeRequest,
        target: ExchangeStatus | str,
    ) -> TransitionResult:
        """Move an exchange request to APPROVED, REJECTED or COMPLETED.

        Legality is checked against ``exchange.status`` locally first.
        """
        try:
            session.require_admin()
        except UnauthorizedError as exc:
            log.warning("exchange_transition_unauthorized", exchange_id=exchange.id)
            return TransitionResult(exchange.id, TransitionOutcome.UNAUTHORIZED, str(exc))

        try:
            target = ExchangeStatus(target)
        except ValueError:
            log.warning(
                "exchange_transition_invalid", exchange_id=exchange.id, target=str(target)
            )
            return TransitionResult(
                exchange.id,
                TransitionOutcome.INVALID_TRANSITION,
                f"Unknown exchange status: {target!r}",
            )

        if exchange.status is None:
            return TransitionResult(
                exchange.id,
                TransitionOutcome.INVALID_TRANSITION,
                str(InvalidTransitionError("unknown", target.value)),
            )
        try:
            ExchangeStateMachine(exchange.status).transition(target)
        except InvalidTransitionError as exc:
            log.warning(
                "exchange_transition_invalid",
                exchange_id=exchange.id,
                from_status=exchange.status.value,
                target=target.value,
            )
            return TransitionResult(
                exchange.id, TransitionOutcome.INVALID_TRANSITION, str(exc)
            )

        log.info(
            "exchange_transition_submitted",
            exchange_id=exchange.id,
            from_status=exchange.status.value,
            target=target.value,
        )
        try:
            await self._service.update_exchange(session, exchange.id, target)
        except MalformedResponseError as exc:
            log.warning(
                "exchange_transition_response_unreadable",
                exchange_id=exchange.id,
                error=str(exc),
            )
        except ServiceError as exc:
            log.error(
                "exchange_transition_failed",
                exchange_id=exchange.id,
                target=target.value,
                error=str(exc),
            )
            return _failure(exchange.id, exc)

        log.info("exchange_transition_applied", exchange_id=exchange.id, target=target.value)
        return TransitionResult(exchange.id, TransitionOutcome.SUCCESS)

    async def list_orders(
        self,
        session: AuthSession,
        page: int = 1,
        start_date: date | None = None,
        end_date: date | None = None,
        status: OrderStatus | str | None = None,
        search: str | None = None,
    ) -> OrderPage:
        """Fetch one page of orders. Filtering happens server-side.

        Raises:
            InvalidFilterError: Bad page number or half-open date range.
            UnauthorizedError: Session is not an admin session.
            ServiceError: Any failure reported by the order service.
        """
        try:
            filters = OrderFilters(
                page=page,
                start_date=start_date,
                end_date=end_date,
                status=status,
                search=search,
            )
        except ValidationError as exc:
            log.warning("order_filters_invalid", errors=exc.error_count())
            raise InvalidFilterError(str(exc)) from exc

        session.require_admin()
        result = await self._service.list_orders(session, filters.to_query())
        for order in result.orders:
            self._report_conflicts(order)
        log.debug(
            "orders_listed",
            page=result.page,
            pages=result.pages,
            count=len(result.orders),
        )
        return result

    async def get_order(self, session: AuthSession, order_id: str) -> Order:
        """Fetch the current snapshot of one order."""
        session.require_admin()
        order = await self._service.get_order(session, order_id)
        self._report_conflicts(order)
        return order

    async def fetch_bill(self, session: AuthSession, order_id: str) -> bytes:
        """Download the bill document rendered by the service."""
        session.require_admin()
        document = await self._service.generate_bill(session, order_id)
        log.info("bill_downloaded", order_id=order_id, size=len(document))
        return document

    @staticmethod
    def _report_conflicts(order: Order) -> None:
        for conflict in find_status_conflicts(order):
            log.warning("order_status_conflict", order_id=order.id, conflict=conflict)
