"""Admin authentication: identity service client and local JWT verification."""

from access_admin.infrastructure.security.identity import (
    CentralAuthClient,
    JwtIdentityProvider,
)
from access_admin.infrastructure.security.jwt import verify_token

__all__ = ["CentralAuthClient", "JwtIdentityProvider", "verify_token"]
