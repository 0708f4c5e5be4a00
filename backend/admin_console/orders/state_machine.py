"""Order and exchange state machines -- pure transition logic with validation.

No I/O. Validates requested transitions against static tables and raises
on invalid ones. The order service remains the enforcing authority; these
checks only keep illegal requests off the network.
"""

from __future__ import annotations

from typing import ClassVar

from admin_console.orders.types import (
    TERMINAL_EXCHANGE_STATUSES,
    TERMINAL_ORDER_STATUSES,
    OrderAction,
)
from admin_console.service.types import ExchangeStatus, Order


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is requested."""

    def __init__(self, from_state: str, to_state: str, detail: str = "") -> None:
        self.from_state = from_state
        self.to_state = to_state
        self.detail = detail
        message = f"Invalid transition: {from_state} -> {to_state}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ExchangeStateMachine:
    """Transition logic for exchange requests.

    Validates from->to transitions against a static transition table.
    Raises InvalidTransitionError on invalid transitions. PENDING is
    never a target.
    """

    TRANSITIONS: ClassVar[dict[ExchangeStatus, frozenset[ExchangeStatus]]] = {
        ExchangeStatus.PENDING: frozenset(
            {
                ExchangeStatus.APPROVED,
                ExchangeStatus.REJECTED,
            }
        ),
        ExchangeStatus.APPROVED: frozenset(
            {
                ExchangeStatus.COMPLETED,
            }
        ),
    }

    def __init__(self, state: ExchangeStatus) -> None:
        self._state = state

    @property
    def state(self) -> ExchangeStatus:
        """Current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Whether the current state is terminal (no further transitions)."""
        return self._state in TERMINAL_EXCHANGE_STATUSES

    @property
    def allowed_targets(self) -> frozenset[ExchangeStatus]:
        return self.TRANSITIONS.get(self._state, frozenset())

    def transition(self, to: ExchangeStatus) -> None:
        """Validate and apply a state transition.

        Raises:
            InvalidTransitionError: If the transition is not allowed.
        """
        if self.is_terminal:
            raise InvalidTransitionError(
                self._state.value, to.value, "exchange request is closed"
            )
        if to not in self.allowed_targets:
            raise InvalidTransitionError(self._state.value, to.value)
        self._state = to


def _order_state_name(order: Order) -> str:
    return order.status.value if order.status is not None else "unknown"


def check_order_action(order: Order, action: OrderAction) -> None:
    """Validate a staff action against an order snapshot.

    MARK_DELIVERED needs a non-terminal status; MARK_PAID needs an
    unpaid order. An unknown status counts as non-terminal.

    Raises:
        InvalidTransitionError: If the action is not allowed.
    """
    if action is OrderAction.MARK_DELIVERED:
        if order.status in TERMINAL_ORDER_STATUSES:
            raise InvalidTransitionError(
                _order_state_name(order), action.value, "order is closed"
            )
    elif action is OrderAction.MARK_PAID:
        if order.is_paid:
            raise InvalidTransitionError("paid", action.value, "order is already paid")


def available_actions(order: Order) -> frozenset[OrderAction]:
    """Actions staff may trigger on this snapshot."""
    allowed: set[OrderAction] = set()
    for action in OrderAction:
        try:
            check_order_action(order, action)
        except InvalidTransitionError:
            continue
        allowed.add(action)
    return frozenset(allowed)


def available_exchange_targets(status: ExchangeStatus | None) -> frozenset[ExchangeStatus]:
    """Targets staff may request from the given exchange status."""
    if status is None:
        return frozenset()
    return ExchangeStateMachine(status).allowed_targets
