"""Service interfaces (ports) for external collaborators.

Identity service and consumer-cache invalidation. Implementations live in
access_admin.infrastructure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class AdminIdentity:
    """Administrator resolved from a bearer credential."""

    admin_id: str
    email: str | None = None
    name: str | None = None


class IIdentityProvider(Protocol):
    """Resolve a bearer token to an authorized administrator."""

    async def authenticate(self, token: str) -> AdminIdentity:
        """Return the administrator; raise AuthenticationException or AuthorizationException."""


class ICacheInvalidator(Protocol):
    """Fire-and-forget invalidation of the consumer-facing access cache.

    Implementations log failures and never raise.
    """

    async def invalidate_user(self, user_id: str) -> None:
        """Drop cached access for one user."""

    async def invalidate_all(self) -> None:
        """Drop cached access for every user."""
