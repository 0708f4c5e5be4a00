"""Authenticated staff session.

The session is an explicit capability passed to every operation; nothing
in the console reads a token from ambient global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from admin_console.service.errors import UnauthorizedError


class Role(str, Enum):
    """Account roles reported by the auth endpoint."""

    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class AuthSession:
    """Bearer credential plus the role it was issued for."""

    token: str
    role: str = Role.ADMIN.value
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return bool(self.token) and self.role == Role.ADMIN.value

    def require_admin(self) -> None:
        """Raise UnauthorizedError unless this is a usable admin session."""
        if not self.token:
            raise UnauthorizedError("No credential. Log in or set ADMIN_API__TOKEN.")
        if self.role != Role.ADMIN.value:
            raise UnauthorizedError("Access Denied: Not an administrator account.")

    @property
    def headers(self) -> dict[str, str]:
        """Authorization header for outbound requests."""
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return f"AuthSession(role={self.role!r}, email={self.email!r})"
