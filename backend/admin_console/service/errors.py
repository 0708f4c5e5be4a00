"""Order service error hierarchy.

All errors raised at the API boundary inherit from ServiceError, enabling
clean exception handling in the lifecycle and catalog managers.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all order/catalog service errors."""


class UnauthorizedError(ServiceError):
    """Missing, invalid or non-admin credential (HTTP 401/403)."""


class NotFoundError(ServiceError):
    """Entity id unknown to the service (HTTP 404)."""


class RejectedError(ServiceError):
    """Service declined the request (4xx other than 401/403/404, or a stray 3xx).

    Stores the HTTP status code and the reason reported by the service.
    """

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Request rejected ({status_code}): {reason}")


class ServiceUnavailableError(ServiceError):
    """Network failure, timeout, or 5xx response. Retry by re-invoking."""


class MalformedResponseError(ServiceError):
    """A 2xx response whose body could not be mapped to domain types."""


class ServiceNotConnectedError(ServiceError):
    """Method called before connect() was called."""
