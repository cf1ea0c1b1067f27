"""Shared utilities: actor context, enums, telemetry, and cross-cutting helpers.

Used by application, infrastructure, and api layers. No business logic.
"""

from access_admin.shared.context import ActorContext
from access_admin.shared.enums import AccessAction, AuditOutcome
from access_admin.shared.utils import generate_cuid, redact_secrets, utc_now

__all__ = [
    "AccessAction",
    "ActorContext",
    "AuditOutcome",
    "generate_cuid",
    "redact_secrets",
    "utc_now",
]
