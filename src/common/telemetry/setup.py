"""
OpenTelemetry Setup and Configuration.

Installs a tracer provider with an OTLP exporter. Until `init_telemetry`
runs (or when telemetry is disabled) the OpenTelemetry API hands out
non-recording spans, so instrumented code never needs to check.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

TELEMETRY_ENV_VAR = "NL2SCRY_TELEMETRY_ENABLED"

_telemetry_initialized = False
_tracer_provider: TracerProvider | None = None


@dataclass
class TelemetryConfig:
    """Configuration for telemetry setup."""

    service_name: str = "nl2scry"
    service_version: str = "0.1.0"
    environment: str = field(default_factory=lambda: os.getenv("NL2SCRY_ENV", "development"))
    otlp_endpoint: str = field(
        default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    )
    otlp_insecure: bool = True
    resource_attributes: dict[str, str] = field(default_factory=dict)


def is_telemetry_disabled_by_env() -> bool:
    """Check if telemetry is disabled via environment variable."""
    value = os.getenv(TELEMETRY_ENV_VAR, "true").lower()
    return value in ("false", "0", "no", "off")


def init_telemetry(
    service_name: str | None = None,
    otlp_endpoint: str | None = None,
    config: TelemetryConfig | None = None,
) -> bool:
    """
    Initialize OpenTelemetry tracing.

    Call once at process startup. Disabled by setting
    NL2SCRY_TELEMETRY_ENABLED=false.

    Returns:
        True if a tracer provider was installed
    """
    global _telemetry_initialized, _tracer_provider

    if _telemetry_initialized:
        logger.debug("Telemetry already initialized")
        return _tracer_provider is not None

    _telemetry_initialized = True

    if is_telemetry_disabled_by_env():
        logger.info(f"Telemetry disabled via {TELEMETRY_ENV_VAR}")
        return False

    config = config or TelemetryConfig()
    if service_name:
        config.service_name = service_name
    if otlp_endpoint:
        config.otlp_endpoint = otlp_endpoint

    resource_attrs = {
        SERVICE_NAME: config.service_name,
        SERVICE_VERSION: config.service_version,
        "deployment.environment": config.environment,
    }
    resource_attrs.update(config.resource_attributes)

    _tracer_provider = TracerProvider(resource=Resource.create(resource_attrs))
    _tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=config.otlp_endpoint, insecure=config.otlp_insecure)
        )
    )
    trace.set_tracer_provider(_tracer_provider)
    logger.info(f"Tracing initialized, exporting to {config.otlp_endpoint}")
    return True


def shutdown_telemetry() -> None:
    """Flush pending spans and shut the tracer provider down."""
    global _tracer_provider, _telemetry_initialized

    if _tracer_provider is None:
        return

    _tracer_provider.force_flush(timeout_millis=5000)
    _tracer_provider.shutdown()
    logger.debug("Tracer provider shut down")
    _tracer_provider = None
    _telemetry_initialized = False


def get_tracer(name: str = "nl2scry") -> Any:
    """
    Get a tracer for creating spans.

    Args:
        name: Tracer name (typically module or component name)
    """
    return trace.get_tracer(name)


def is_telemetry_enabled() -> bool:
    """Check if a tracer provider has been installed."""
    return _tracer_provider is not None
