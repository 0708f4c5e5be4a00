"""Order lifecycle package."""

from admin_console.orders.lifecycle import (
    OrderLifecycleManager,
    classify_status,
    find_status_conflicts,
)
from admin_console.orders.state_machine import (
    ExchangeStateMachine,
    InvalidTransitionError,
    available_actions,
    available_exchange_targets,
    check_order_action,
)
from admin_console.orders.types import (
    TERMINAL_EXCHANGE_STATUSES,
    TERMINAL_ORDER_STATUSES,
    InvalidFilterError,
    OrderAction,
    OrderFilters,
    StatusLabel,
    TransitionOutcome,
    TransitionResult,
)

__all__ = [
    "TERMINAL_EXCHANGE_STATUSES",
    "TERMINAL_ORDER_STATUSES",
    "ExchangeStateMachine",
    "InvalidFilterError",
    "InvalidTransitionError",
    "OrderAction",
    "OrderFilters",
    "OrderLifecycleManager",
    "StatusLabel",
    "TransitionOutcome",
    "TransitionResult",
    "available_actions",
    "available_exchange_targets",
    "check_order_action",
    "classify_status",
    "find_status_conflicts",
]
