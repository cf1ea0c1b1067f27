"""Settings validation tests."""

import pytest
from pydantic import ValidationError

from access_admin.core.config import Settings


def test_defaults_are_valid() -> None:
    settings = Settings(_env_file=None)
    assert settings.auth_backend == "central"
    assert settings.cache_invalidation_backend == "none"
    assert settings.audit_default_limit == 100


def test_unknown_auth_backend_rejected() -> None:
    with pytest.raises(ValidationError, match="auth_backend"):
        Settings(_env_file=None, auth_backend="ldap")


def test_jwt_backend_requires_secret_key() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY"):
        Settings(_env_file=None, auth_backend="jwt", secret_key="")


def test_jwt_backend_with_secret_key() -> None:
    settings = Settings(_env_file=None, auth_backend="jwt", secret_key="s3cret")
    assert settings.secret_key.get_secret_value() == "s3cret"


def test_http_invalidation_requires_url() -> None:
    with pytest.raises(ValidationError, match="CACHE_INVALIDATION_URL"):
        Settings(_env_file=None, cache_invalidation_backend="http")


def test_unknown_invalidation_backend_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, cache_invalidation_backend="memcached")


def test_audit_limits_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, audit_default_limit=500, audit_max_limit=100)
