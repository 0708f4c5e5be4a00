"""AuthService protocol — credential exchange against the auth API."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from admin_console.service.session import AuthSession


@runtime_checkable
class AuthService(Protocol):
    """Exchanges staff credentials for an AuthSession."""

    async def login(self, email: str, password: str) -> AuthSession:
        """Authenticate and return an admin session.

        Raises:
            UnauthorizedError: Bad credentials or a non-admin account.
        """
        ...
