"""HttpAuthService — exchanges staff credentials for an AuthSession."""

from __future__ import annotations

import structlog

from admin_console.service.errors import (
    MalformedResponseError,
    RejectedError,
    UnauthorizedError,
)
from admin_console.service.http.client import HttpApiClient
from admin_console.service.session import AuthSession, Role

logger = structlog.get_logger()


class HttpAuthService(HttpApiClient):
    """AuthService implementation backed by httpx."""

    async def login(self, email: str, password: str) -> AuthSession:
        try:
            response = await self._request(
                "POST",
                "/auth/login",
                json={"email": email, "password": password},
            )
        except RejectedError as e:
            # Bad credentials come back as a plain 400 from some builds
            raise UnauthorizedError(e.reason) from e

        body = self._json(response)
        if not isinstance(body, dict) or not body.get("token"):
            raise MalformedResponseError("Login response carried no token")

        role = str(body.get("role") or "")
        if role != Role.ADMIN.value:
            logger.warning("login_refused_non_admin", email=email, role=role)
            raise UnauthorizedError("Access Denied: Not an administrator account.")

        logger.info("login_succeeded", email=email)
        return AuthSession(token=str(body["token"]), role=role, email=email)
