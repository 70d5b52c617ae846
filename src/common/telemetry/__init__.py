"""
Telemetry Module.

OpenTelemetry tracing for the translation pipeline.

Usage:
    from src.common.telemetry import init_telemetry, trace_span

    init_telemetry(service_name="nl2scry", otlp_endpoint="http://localhost:4317")

    with trace_span("translation.translate", {"query.length": len(query)}) as span:
        ...
"""

from src.common.telemetry.setup import (
    TelemetryConfig,
    get_tracer,
    init_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
)
from src.common.telemetry.tracing import add_span_event, record_exception, trace_span

__all__ = [
    "init_telemetry",
    "shutdown_telemetry",
    "get_tracer",
    "is_telemetry_enabled",
    "TelemetryConfig",
    "trace_span",
    "add_span_event",
    "record_exception",
]
