"""Tracing setup is a no-op unless enabled."""

from access_admin.core.config import Settings
from access_admin.shared.telemetry import setup_tracing, shutdown_tracing


def test_tracing_disabled_by_default() -> None:
    settings = Settings(_env_file=None, telemetry_enabled=False)
    assert setup_tracing(settings) is None


def test_shutdown_without_provider() -> None:
    shutdown_tracing(None)
