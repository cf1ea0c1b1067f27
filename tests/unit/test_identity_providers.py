"""Identity provider tests: central identity service client and local JWT verification."""

from datetime import UTC, datetime, timedelta

import httpx
import pytest
from jose import jwt

from access_admin.core.config import Settings, get_settings
from access_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    IdentityServiceException,
)
from access_admin.infrastructure.security import CentralAuthClient, JwtIdentityProvider

AUTH_URL = "http://identity.local"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _settings(**overrides) -> Settings:
    return Settings(central_auth_url=AUTH_URL, **overrides)


async def test_central_auth_returns_admin_identity() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "status": "success",
                "data": {"userId": "adm-7", "email": "ops@example.com", "name": "Ops"},
            },
        )

    async with _client(handler) as client:
        identity = await CentralAuthClient(client, _settings()).authenticate("tok")

    assert identity.admin_id == "adm-7"
    assert identity.email == "ops@example.com"
    assert seen[0].url.path == "/api/v1/auth/validateAdmin"
    assert seen[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.parametrize(
    "response,expected",
    [
        (httpx.Response(401), AuthenticationException),
        (httpx.Response(403), AuthorizationException),
        (httpx.Response(502), IdentityServiceException),
        (httpx.Response(200, text="<html>"), IdentityServiceException),
        (httpx.Response(200, json=["not", "an", "object"]), IdentityServiceException),
        (httpx.Response(200, json={"status": "fail", "message": "expired"}), AuthenticationException),
        (httpx.Response(200, json={"status": "success"}), IdentityServiceException),
        (httpx.Response(200, json={"data": {"email": "x@example.com"}}), IdentityServiceException),
    ],
)
async def test_central_auth_error_mapping(response, expected) -> None:
    async with _client(lambda request: response) as client:
        with pytest.raises(expected):
            await CentralAuthClient(client, _settings()).authenticate("tok")


async def test_central_auth_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with _client(handler) as client:
        with pytest.raises(IdentityServiceException):
            await CentralAuthClient(client, _settings()).authenticate("tok")


async def test_central_auth_not_configured() -> None:
    with pytest.raises(AuthenticationException):
        await CentralAuthClient(None, Settings(central_auth_url="")).authenticate("tok")


async def test_central_auth_without_http_client() -> None:
    with pytest.raises(IdentityServiceException):
        await CentralAuthClient(None, _settings()).authenticate("tok")


@pytest.fixture
def jwt_settings(monkeypatch) -> Settings:
    monkeypatch.setenv("AUTH_BACKEND", "jwt")
    monkeypatch.setenv("SECRET_KEY", "unit-test-secret")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def _token(settings: Settings, **claims) -> str:
    payload = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
    return jwt.encode(payload, settings.secret_key.get_secret_value(), algorithm=settings.algorithm)


async def test_jwt_provider_accepts_admin_token(jwt_settings) -> None:
    token = _token(jwt_settings, sub="adm-1", role="admin", email="a@example.com")

    identity = await JwtIdentityProvider(jwt_settings).authenticate(token)

    assert identity.admin_id == "adm-1"
    assert identity.email == "a@example.com"


async def test_jwt_provider_rejects_non_admin_role(jwt_settings) -> None:
    token = _token(jwt_settings, sub="u-1", role="viewer")

    with pytest.raises(AuthorizationException):
        await JwtIdentityProvider(jwt_settings).authenticate(token)


async def test_jwt_provider_rejects_token_without_role(jwt_settings) -> None:
    token = _token(jwt_settings, sub="regular-user")

    with pytest.raises(AuthorizationException):
        await JwtIdentityProvider(jwt_settings).authenticate(token)


async def test_jwt_provider_rejects_expired_token(jwt_settings) -> None:
    token = jwt.encode(
        {"sub": "adm-1", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        "unit-test-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationException):
        await JwtIdentityProvider(jwt_settings).authenticate(token)


async def test_jwt_provider_rejects_wrong_signature(jwt_settings) -> None:
    token = jwt.encode(
        {"sub": "adm-1", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "another-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationException):
        await JwtIdentityProvider(jwt_settings).authenticate(token)


async def test_jwt_provider_requires_subject(jwt_settings) -> None:
    with pytest.raises(AuthenticationException):
        await JwtIdentityProvider(jwt_settings).authenticate(_token(jwt_settings, role="admin"))
