"""Shared telemetry: logging setup and OpenTelemetry tracing."""

from access_admin.shared.telemetry.logging import setup_logging
from access_admin.shared.telemetry.telemetry import (
    instrument_app,
    setup_tracing,
    shutdown_tracing,
)

__all__ = [
    "setup_logging",
    "setup_tracing",
    "instrument_app",
    "shutdown_tracing",
]
