"""FakeAuthService — canned staff accounts for testing."""

from __future__ import annotations

import uuid
from typing import Self

from admin_console.service.errors import UnauthorizedError
from admin_console.service.session import AuthSession, Role


class FakeAuthService:
    """AuthService over an ``{email: (password, role)}`` table."""

    def __init__(self, accounts: dict[str, tuple[str, str]] | None = None) -> None:
        self._accounts = accounts or {}
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.disconnect()

    async def login(self, email: str, password: str) -> AuthSession:
        account = self._accounts.get(email)
        if account is None or account[0] != password:
            raise UnauthorizedError("Invalid email or password")
        role = account[1]
        if role != Role.ADMIN.value:
            raise UnauthorizedError("Access Denied: Not an administrator account.")
        return AuthSession(token=uuid.uuid4().hex, role=role, email=email)
