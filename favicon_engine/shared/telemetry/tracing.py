"""Span helpers for engine operations.

traced() wraps a coroutine method in a span; the helpers below annotate
whichever span is current. All of them are no-ops when no tracer provider
is installed.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Keyword arguments copied onto spans. Project paths are never recorded.
_RECORDED_KWARGS = frozenset({"grayscale", "timeout"})

_tracer = trace.get_tracer("favicon_engine")


def traced(
    span_name: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Run the decorated coroutine function inside a span named span_name.

    Recorded keyword arguments become ``favicon.<name>`` attributes. An
    exception marks the span as errored and is re-raised unchanged.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                for key in _RECORDED_KWARGS.intersection(kwargs):
                    if kwargs[key] is not None:
                        span.set_attribute(f"favicon.{key}", kwargs[key])
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set ``favicon.<key>`` attributes on the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(f"favicon.{key}", value)


def add_span_event(name: str, attributes: dict[str, str | int | float | bool] | None = None) -> None:
    """Record a named event on the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})
