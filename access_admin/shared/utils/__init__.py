"""Shared utilities: datetime, generators, redaction."""

from access_admin.shared.utils.datetime import ensure_utc, utc_now
from access_admin.shared.utils.generators import generate_cuid
from access_admin.shared.utils.redaction import REDACTED, redact_secrets

__all__ = [
    "REDACTED",
    "ensure_utc",
    "generate_cuid",
    "redact_secrets",
    "utc_now",
]
