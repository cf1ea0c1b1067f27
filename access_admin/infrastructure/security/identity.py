"""Identity providers: resolve a bearer token to the acting administrator.

CentralAuthClient delegates to the identity service; JwtIdentityProvider
verifies a locally-signed token. Both implement IIdentityProvider.
"""

import logging
from typing import Any

import httpx

from access_admin.application.interfaces.services import AdminIdentity
from access_admin.core.config import Settings
from access_admin.core.constants import CENTRAL_AUTH_VALIDATE_PATH
from access_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    IdentityServiceException,
)
from access_admin.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

_ID_FIELDS = ("user_id", "userId", "id")


def _first_present(data: dict[str, Any], fields: tuple[str, ...]) -> str | None:
    for name in fields:
        value = data.get(name)
        if value:
            return str(value)
    return None


class CentralAuthClient:
    """Validates admin tokens against the identity service's validateAdmin endpoint."""

    def __init__(
        self, http_client: httpx.AsyncClient | None, settings: Settings
    ) -> None:
        self.http_client = http_client
        self.settings = settings

    async def authenticate(self, token: str) -> AdminIdentity:
        """Return the admin behind token.

        Raises:
            AuthenticationException: Token rejected (401 or status 'fail').
            AuthorizationException: Token valid but not an administrator (403).
            IdentityServiceException: Service unreachable or reply malformed.
        """
        if not self.settings.central_auth_url:
            logger.error("CENTRAL_AUTH_URL is not configured")
            raise AuthenticationException("Identity service is not configured")
        if self.http_client is None:
            raise IdentityServiceException("HTTP client is not initialized")
        url = f"{self.settings.central_auth_url.rstrip('/')}{CENTRAL_AUTH_VALIDATE_PATH}"
        try:
            response = await self.http_client.get(
                url,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.settings.central_auth_timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.warning("Identity service request failed: %s", e)
            raise IdentityServiceException(str(e) or type(e).__name__) from e

        if response.status_code == 401:
            raise AuthenticationException("Invalid or expired token")
        if response.status_code == 403:
            raise AuthorizationException("Administrator privileges required")
        if response.status_code >= 400:
            raise IdentityServiceException(f"unexpected status {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise IdentityServiceException("reply is not JSON") from e
        if not isinstance(body, dict):
            raise IdentityServiceException("reply is not an object")
        if body.get("status") == "fail":
            raise AuthenticationException(str(body.get("message") or "Invalid token"))

        data = body.get("data")
        if not isinstance(data, dict):
            raise IdentityServiceException("reply has no data object")
        admin_id = _first_present(data, _ID_FIELDS)
        if admin_id is None:
            raise IdentityServiceException("reply has no admin id")
        return AdminIdentity(
            admin_id=admin_id,
            email=data.get("email"),
            name=data.get("name") or data.get("full_name"),
        )


class JwtIdentityProvider:
    """Verifies tokens signed with SECRET_KEY; the role claim must be the admin role."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def authenticate(self, token: str) -> AdminIdentity:
        try:
            payload = verify_token(token)
        except ValueError as e:
            raise AuthenticationException(str(e)) from None
        if payload.get("role") != self.settings.admin_role:
            raise AuthorizationException("Administrator privileges required")
        admin_id = _first_present(payload, ("sub", "userId", "user_id"))
        if admin_id is None:
            raise AuthenticationException("Token missing subject")
        return AdminIdentity(
            admin_id=admin_id, email=payload.get("email"), name=payload.get("name")
        )
