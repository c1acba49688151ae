"""Shared telemetry: logging setup, OpenTelemetry tracing and span helpers."""

from nearh.shared.telemetry.logging import setup_logging
from nearh.shared.telemetry.telemetry import (
    get_tracer_provider,
    instrument,
    setup_tracing,
    shutdown_tracing,
)
from nearh.shared.telemetry.tracing import add_span_attributes, set_span_error, traced

__all__ = [
    "setup_logging",
    "setup_tracing",
    "instrument",
    "get_tracer_provider",
    "shutdown_tracing",
    "traced",
    "add_span_attributes",
    "set_span_error",
]
