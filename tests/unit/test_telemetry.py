"""Tests for span helpers and telemetry wiring (no provider installed)."""

import pytest
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from favicon_engine.core.config import Settings
from favicon_engine.shared.telemetry.telemetry import (
    EngineTelemetry,
    build_span_exporter,
    get_telemetry,
    set_telemetry,
)
from favicon_engine.shared.telemetry.tracing import add_span_attributes, add_span_event, traced


class TestTraced:
    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        @traced("test.op")
        async def op(value: int, *, grayscale: bool = False) -> int:
            add_span_attributes(doubled=True)
            add_span_event("test.event", {"value": value})
            return value * 2

        assert await op(21, grayscale=True) == 42

    @pytest.mark.asyncio
    async def test_reraises(self) -> None:
        @traced("test.failing")
        async def failing() -> None:
            raise LookupError("missing")

        with pytest.raises(LookupError, match="missing"):
            await failing()

    def test_preserves_metadata(self) -> None:
        @traced("test.named")
        async def named_operation() -> None:
            """Docstring kept."""

        assert named_operation.__name__ == "named_operation"
        assert named_operation.__doc__ == "Docstring kept."


class TestBuildSpanExporter:
    def test_none(self) -> None:
        assert build_span_exporter("none") is None

    @pytest.mark.parametrize("kind", ["console", "CONSOLE", "zipkin", ""])
    def test_console_and_fallbacks(self, kind: str) -> None:
        assert isinstance(build_span_exporter(kind), ConsoleSpanExporter)

    def test_otlp_without_endpoint_uses_console(self) -> None:
        assert isinstance(build_span_exporter("otlp"), ConsoleSpanExporter)

    def test_otlp(self) -> None:
        assert isinstance(build_span_exporter("otlp", "http://localhost:4317"), OTLPSpanExporter)


class TestEngineTelemetry:
    def test_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            telemetry_exporter="none",
            telemetry_sample_rate=0.25,
            telemetry_environment="ci",
        )
        telemetry = EngineTelemetry.from_settings(settings)
        assert telemetry.service_name == "favicon-engine"
        assert telemetry.exporter == "none"
        assert telemetry.sample_rate == 0.25
        assert telemetry.environment == "ci"

    def test_shutdown_before_start_is_noop(self) -> None:
        telemetry = EngineTelemetry("svc", "1.0")
        telemetry.instrument_logging()
        telemetry.shutdown()
        assert telemetry.tracer_provider is None

    def test_global_instance(self) -> None:
        telemetry = EngineTelemetry("svc", "1.0")
        set_telemetry(telemetry)
        try:
            assert get_telemetry() is telemetry
        finally:
            set_telemetry(None)
        assert get_telemetry() is None
