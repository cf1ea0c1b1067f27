"""Domain enumerations.

Lifecycle statuses shared by applications, catalog entries, master
registry rows and users.
"""

from enum import Enum


class RecordStatus(str, Enum):
    """Lifecycle status of an application, catalog entry, registry row or user."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values."""
        return [s.value for s in cls]
