"""OpenTelemetry tracer provider for the favicon engine.

Spans cover icon discovery and favicon resolution. Export goes to the
console during local development or to an OTLP collector; with
TELEMETRY_ENABLED unset nothing is installed and every span is a no-op.
"""

from __future__ import annotations

import logging
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from favicon_engine.core.config import Settings

logger = logging.getLogger(__name__)

EXPORTER_CONSOLE = "console"
EXPORTER_OTLP = "otlp"
EXPORTER_NONE = "none"


def build_span_exporter(kind: str, otlp_endpoint: str | None = None) -> SpanExporter | None:
    """Return the span exporter for TELEMETRY_EXPORTER, or None for "none".

    "otlp" without an endpoint and unknown kinds fall back to the console.
    """
    kind = (kind or EXPORTER_CONSOLE).lower()
    if kind == EXPORTER_NONE:
        return None
    if kind == EXPORTER_OTLP:
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
    elif kind != EXPORTER_CONSOLE:
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class EngineTelemetry:
    """Owns the tracer provider installed for the engine's lifetime."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter: str = EXPORTER_CONSOLE,
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None
        self._logging_instrumented = False

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineTelemetry:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def start(self) -> TracerProvider | None:
        """Create the tracer provider and install it globally.

        Returns:
            The provider, or None if it could not be created (the engine
            keeps running untraced).
        """
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(self.sample_rate),
            )
            exporter = build_span_exporter(self.exporter, self.otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception as e:
            logger.exception("Failed to start telemetry: %s", e)
            return None

        self.tracer_provider = provider
        logger.info(
            "Tracing started: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.exporter,
            self.sample_rate,
        )
        return provider

    def instrument_logging(self) -> None:
        """Add trace_id/span_id to log records (no-op before start())."""
        if self.tracer_provider is None or self._logging_instrumented:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider,
                set_logging_format=True,
            )
        except Exception as e:
            logger.exception("Failed to instrument logging: %s", e)
            return
        self._logging_instrumented = True

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self._logging_instrumented:
            LoggingInstrumentor().uninstrument()
            self._logging_instrumented = False
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("Error during telemetry shutdown: %s", e)
        self.tracer_provider = None


_telemetry: EngineTelemetry | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> EngineTelemetry | None:
    """Return the telemetry installed by the engine lifespan, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: EngineTelemetry | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
