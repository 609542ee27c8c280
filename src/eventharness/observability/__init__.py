"""
Observability for eventharness.

Tracing is optional: install the ``telemetry`` extra to get real
OpenTelemetry spans, otherwise every component falls back to NullTracer.
"""

from eventharness.observability.tracer import (
    OTEL_AVAILABLE,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    Tracer,
    create_tracer,
)

__all__ = [
    "OTEL_AVAILABLE",
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "create_tracer",
]
