"""Shared enumerations for the access administration service.

Cross-cutting enums used by application and infrastructure (audit action
kinds and outcomes). Domain lifecycle enums live in access_admin.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditOutcome(_ValuesMixin, str, Enum):
    """Outcome recorded on every audit entry."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class AccessAction(_ValuesMixin, str, Enum):
    """Kind of administrative mutation recorded in the audit trail."""

    GRANT_APP_ACCESS = "GRANT_APP_ACCESS"
    SET_APP_ACCESS = "SET_APP_ACCESS"
    ADD_BRAND_ACCESS = "ADD_BRAND_ACCESS"
    UPDATE_BRAND_PLATFORMS = "UPDATE_BRAND_PLATFORMS"
    REMOVE_BRAND_ACCESS = "REMOVE_BRAND_ACCESS"
    REMOVE_APP_ACCESS = "REMOVE_APP_ACCESS"
    CREATE_BRAND_MAPPING = "CREATE_BRAND_MAPPING"
    UPDATE_BRAND_MAPPING = "UPDATE_BRAND_MAPPING"
    DELETE_BRAND_MAPPING = "DELETE_BRAND_MAPPING"
    UPDATE_USER_STATUS = "UPDATE_USER_STATUS"
