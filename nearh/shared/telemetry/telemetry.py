"""OpenTelemetry tracing setup.

Off unless TELEMETRY_ENABLED. The resource carries the cache backend and
cache key version so traces of degraded cache paths can be told apart per
deployment. Spans from the cache services are created with
nearh.shared.telemetry.tracing.traced.
"""

import logging
import threading
from typing import Any

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from nearh.core.config import Settings

logger = logging.getLogger(__name__)

_provider: TracerProvider | None = None
_provider_lock = threading.RLock()


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for TELEMETRY_EXPORTER; None means spans are recorded but not exported."""
    if kind == "none":
        return None
    if kind == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=otlp_endpoint.startswith("http://"),
            )
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
    elif kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


def setup_tracing(settings: Settings) -> TracerProvider | None:
    """Install the global TracerProvider described by settings.

    Returns:
        The provider, or None when telemetry is disabled or setup failed.
    """
    global _provider
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled")
        return None
    resource = Resource(
        attributes={
            SERVICE_NAME: settings.app_name,
            SERVICE_VERSION: settings.app_version,
            "deployment.environment": settings.telemetry_environment,
            "nearh.cache.backend": settings.cache_backend,
            "nearh.cache.version": settings.cache_version,
        }
    )
    try:
        provider = TracerProvider(
            resource=resource, sampler=TraceIdRatioBased(settings.telemetry_sample_rate)
        )
        exporter = _build_exporter(settings.telemetry_exporter, settings.telemetry_otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
    except Exception as e:
        logger.exception("Failed to initialize telemetry: %s", e)
        return None
    with _provider_lock:
        _provider = provider
    logger.info(
        "Tracing enabled: service=%s exporter=%s sample_rate=%s",
        settings.app_name,
        settings.telemetry_exporter,
        settings.telemetry_sample_rate,
    )
    return provider


def instrument(
    app: FastAPI,
    provider: TracerProvider,
    *,
    engine: Any = None,
    redis_enabled: bool = False,
) -> None:
    """Attach auto-instrumentation. A failing instrumentor is logged and skipped.

    Args:
        app: Application whose requests become root spans (health probes excluded).
        provider: Provider returned by setup_tracing.
        engine: AsyncEngine to instrument, when the SQL store is configured.
        redis_enabled: Instrument redis-py (only for CACHE_BACKEND=redis).
    """
    steps: list[tuple[str, Any]] = [
        (
            "fastapi",
            lambda: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls="/api/v1/health"
            ),
        ),
        (
            "logging",
            lambda: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=True
            ),
        ),
    ]
    if redis_enabled:
        steps.append(("redis", lambda: RedisInstrumentor().instrument(tracer_provider=provider)))
    if engine is not None:
        steps.append(
            (
                "sqlalchemy",
                lambda: SQLAlchemyInstrumentor().instrument(
                    engine=engine.sync_engine, tracer_provider=provider
                ),
            )
        )
    for name, step in steps:
        try:
            step()
        except Exception as e:
            logger.exception("Failed to instrument %s: %s", name, e)
        else:
            logger.info("%s instrumentation enabled", name)


def get_tracer_provider() -> TracerProvider | None:
    """Provider installed by setup_tracing, or None."""
    with _provider_lock:
        return _provider


def shutdown_tracing() -> None:
    """Flush pending spans and forget the provider. Safe to call when tracing is off."""
    global _provider
    with _provider_lock:
        provider, _provider = _provider, None
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception as e:
        logger.exception("Error during telemetry shutdown: %s", e)
    else:
        logger.info("Telemetry shutdown complete")
