"""Tests for domain exceptions (error_code, message, details)."""

import pytest

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


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = AccessAdminException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AccessAdminException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_base_exception_to_dict() -> None:
    exc = AccessAdminException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_with_field() -> None:
    exc = ValidationException("Invalid", field="platform_ids")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "platform_ids"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Invalid").details == {}


def test_platform_not_licensed_lists_offending_ids() -> None:
    exc = PlatformNotLicensedException("A", "B", ["P9"])
    assert exc.error_code == "PLATFORM_NOT_LICENSED"
    assert exc.details == {"app_id": "A", "brand_id": "B", "invalid_platform_ids": ["P9"]}


def test_resource_not_found_message() -> None:
    exc = ResourceNotFoundException("dashboard_type", "dt-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "Dashboard type not found: dt-1"
    assert exc.details == {"resource_type": "dashboard_type", "resource_id": "dt-1"}


def test_access_not_found_brand_and_app_scopes() -> None:
    brand = AccessNotFoundException("U", "A", "B")
    app = AccessNotFoundException("U", "A")
    assert brand.details == {"user_id": "U", "app_id": "A", "brand_id": "B"}
    assert brand.message == "No brand access found for this user"
    assert app.details == {"user_id": "U", "app_id": "A"}
    assert app.message == "No application access found for this user"


def test_duplicate_assignment_details() -> None:
    exc = DuplicateAssignmentException(
        "Already mapped", assignment_type="catalog_entry", details_extra={"app_id": "A"}
    )
    assert exc.error_code == "DUPLICATE_ASSIGNMENT"
    assert exc.details == {"assignment_type": "catalog_entry", "app_id": "A"}


@pytest.mark.parametrize(
    "exc,code",
    [
        (AuthenticationException(), "AUTHENTICATION_ERROR"),
        (AuthorizationException(), "PERMISSION_DENIED"),
        (IdentityServiceException("timeout"), "IDENTITY_SERVICE_ERROR"),
        (PersistenceException("grants.add", "deadlock"), "PERSISTENCE_ERROR"),
        (SqlNotConfiguredException(), "SERVICE_UNAVAILABLE"),
    ],
)
def test_error_codes(exc: AccessAdminException, code: str) -> None:
    assert exc.error_code == code
    assert isinstance(exc, AccessAdminException)


def test_persistence_exception_details() -> None:
    exc = PersistenceException("grants.add", "deadlock")
    assert exc.message == "Persistence failure during grants.add"
    assert exc.details == {"operation": "grants.add", "reason": "deadlock"}
