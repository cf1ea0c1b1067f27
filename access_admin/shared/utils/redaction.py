"""Secret redaction for request payloads stored in the audit trail."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***"

_SECRET_KEY_RE = re.compile(
    r"(password|secret|token|authorization|api[_-]?key)", re.IGNORECASE
)


def is_secret_key(key: str) -> bool:
    """Return True if a payload key name looks like it holds a credential."""
    return bool(_SECRET_KEY_RE.search(key))


def redact_secrets(value: Any) -> Any:
    """Return a copy of value with credential-like keys replaced by '***'.

    Walks nested dicts and lists; other values are returned unchanged.
    """
    if isinstance(value, dict):
        return {
            k: REDACTED if isinstance(k, str) and is_secret_key(k) else redact_secrets(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_secrets(v) for v in value]
    return value
