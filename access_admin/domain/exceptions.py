"""Domain exceptions for the access administration service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AccessAdminException(Exception):
    """Base exception for all access administration errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AccessAdminException):
    """Raised when input validation fails (e.g. empty platform set)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class PlatformNotLicensedException(AccessAdminException):
    """Raised when requested platforms have no active catalog entry for (app, brand)."""

    def __init__(self, app_id: str, brand_id: str, platform_ids: list[str]) -> None:
        super().__init__(
            "One or more platforms are not valid for this brand and application",
            "PLATFORM_NOT_LICENSED",
            {
                "app_id": app_id,
                "brand_id": brand_id,
                "invalid_platform_ids": platform_ids,
            },
        )


class AuthenticationException(AccessAdminException):
    """Raised when authentication fails (missing, invalid, or rejected token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(AccessAdminException):
    """Raised when the caller is authenticated but is not an administrator."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, "PERMISSION_DENIED")


class IdentityServiceException(AccessAdminException):
    """Raised when the identity service is unreachable or replies unexpectedly."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Identity service error",
            "IDENTITY_SERVICE_ERROR",
            {"reason": reason},
        )


class ResourceNotFoundException(AccessAdminException):
    """Raised when a requested resource (user, application, brand, mapping) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'application').
            resource_id: ID of the resource that was not found.
        """
        super().__init__(
            f"{resource_type.replace('_', ' ').capitalize()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AccessNotFoundException(AccessAdminException):
    """Raised when a user holds no grant in the requested scope."""

    def __init__(
        self, user_id: str, app_id: str, brand_id: str | None = None
    ) -> None:
        details: dict[str, Any] = {"user_id": user_id, "app_id": app_id}
        if brand_id is not None:
            details["brand_id"] = brand_id
            message = "No brand access found for this user"
        else:
            message = "No application access found for this user"
        super().__init__(message, "ACCESS_NOT_FOUND", details)


class DuplicateAssignmentException(AccessAdminException):
    """Raised when an assignment already exists (grant, catalog entry, mapping)."""

    def __init__(
        self,
        message: str,
        assignment_type: str | None = None,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional assignment type and extra details.

        Args:
            message: Human-readable description.
            assignment_type: Optional type (e.g. 'access_grant', 'catalog_entry').
            details_extra: Optional extra key-value pairs for details.
        """
        details: dict[str, Any] = {}
        if assignment_type:
            details["assignment_type"] = assignment_type
        if details_extra:
            details.update(details_extra)
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class PersistenceException(AccessAdminException):
    """Raised when the transactional store fails; the transaction was rolled back."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistence failure during {operation}",
            "PERSISTENCE_ERROR",
            {"operation": operation, "reason": reason},
        )


class SqlNotConfiguredException(AccessAdminException):
    """Raised when a SQL-backed route is used but DATABASE_URL is not set."""

    def __init__(
        self,
        message: str = "SQL database is not configured. Set DATABASE_URL and run migrations.",
    ) -> None:
        super().__init__(message, "SERVICE_UNAVAILABLE", {})
