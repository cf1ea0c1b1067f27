"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from access_admin.domain.enums import RecordStatus
from access_admin.domain.exceptions import (
    AccessAdminException,
    AccessNotFoundException,
    AuthenticationException,
    AuthorizationException,
    DuplicateAssignmentException,
    IdentityServiceException,
    PersistenceException,
    PlatformNotLicensedException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "AccessAdminException",
    "AccessNotFoundException",
    "AuthenticationException",
    "AuthorizationException",
    "DuplicateAssignmentException",
    "IdentityServiceException",
    "PersistenceException",
    "PlatformNotLicensedException",
    "RecordStatus",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
