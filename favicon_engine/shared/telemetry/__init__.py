"""Logging setup, OpenTelemetry provider and span helpers."""

from favicon_engine.shared.telemetry.logging import setup_logging
from favicon_engine.shared.telemetry.telemetry import (
    EngineTelemetry,
    build_span_exporter,
    get_telemetry,
    set_telemetry,
)
from favicon_engine.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "EngineTelemetry",
    "build_span_exporter",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
