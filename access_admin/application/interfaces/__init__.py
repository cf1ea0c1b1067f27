"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from access_admin.infrastructure or access_admin.api.
"""

from access_admin.application.interfaces.repositories import (
    AccessStores,
    IAuditLogRepository,
    ICatalogRepository,
    IDirectoryRepository,
    IGrantRepository,
    StoresFactory,
)
from access_admin.application.interfaces.services import (
    AdminIdentity,
    ICacheInvalidator,
    IIdentityProvider,
)

__all__ = [
    "AccessStores",
    "AdminIdentity",
    "IAuditLogRepository",
    "ICacheInvalidator",
    "ICatalogRepository",
    "IDirectoryRepository",
    "IGrantRepository",
    "IIdentityProvider",
    "StoresFactory",
]
