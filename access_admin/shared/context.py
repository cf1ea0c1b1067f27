"""Request-scoped actor identity.

The authenticated administrator and the request metadata that every audit
record carries. Built once per request by the API dependency layer and passed
explicitly into application services.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of the acting administrator for one request."""

    admin_id: str
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
