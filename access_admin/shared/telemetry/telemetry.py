"""OpenTelemetry tracing for the HTTP surface, SQL queries and Redis calls.

Enabled by TELEMETRY_ENABLED. Failures here are logged; the service keeps
running untraced.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from access_admin.core.config import Settings

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/v1/health"


def setup_tracing(settings: Settings) -> TracerProvider | None:
    """Build and register the global tracer provider; None when disabled or broken."""
    if not settings.telemetry_enabled:
        return None
    try:
        provider = TracerProvider(
            resource=Resource(
                attributes={
                    SERVICE_NAME: settings.app_name,
                    SERVICE_VERSION: settings.app_version,
                    "deployment.environment": settings.telemetry_environment,
                }
            ),
            sampler=TraceIdRatioBased(settings.telemetry_sample_rate),
        )
        exporter_type = settings.telemetry_exporter
        if exporter_type == "otlp" and settings.telemetry_otlp_endpoint:
            endpoint = settings.telemetry_otlp_endpoint
            provider.add_span_processor(
                BatchSpanProcessor(
                    OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
                )
            )
        elif exporter_type != "none":
            if exporter_type != "console":
                logger.warning("Unknown exporter type '%s', using console", exporter_type)
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(provider)
    except Exception as e:
        logger.exception("Failed to initialize telemetry: %s", e)
        return None
    logger.info("Tracing enabled (exporter=%s)", settings.telemetry_exporter)
    return provider


def instrument_app(
    app: FastAPI,
    provider: TracerProvider,
    *,
    engine: AsyncEngine | None = None,
    redis: bool = False,
) -> None:
    """Attach instrumentors; health checks are not traced."""
    try:
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=provider, excluded_urls=HEALTH_PATH
        )
        LoggingInstrumentor().instrument(tracer_provider=provider)
        if engine is not None:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider
            )
        if redis:
            RedisInstrumentor().instrument(tracer_provider=provider)
    except Exception as e:
        logger.exception("Failed to instrument application: %s", e)


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush pending spans."""
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception as e:
        logger.exception("Error during telemetry shutdown: %s", e)
