"""Utility functions and decorators for distributed tracing."""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


def _setup_span(
    span: trace.Span,
    attributes: dict[str, str | int | float | bool] | None,
    arguments: dict[str, Any],
) -> None:
    """Set optional attributes and safe call arguments on the current span."""
    if attributes:
        for key, value in attributes.items():
            span.set_attribute(key, value)
    _set_safe_span_attrs(span, arguments)


async def _run_in_span_async(span: trace.Span, run: Callable[[], Any]) -> Any:
    """Run an async callable, set span status, and record exceptions."""
    try:
        result = await run()
    except Exception as e:
        span.set_status(Status(StatusCode.ERROR, str(e)))
        span.record_exception(e)
        raise
    else:
        span.set_status(Status(StatusCode.OK))
        return result


def _bound_arguments(
    signature: inspect.Signature, args: tuple, kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Map positional and keyword arguments to parameter names; {} if they do not bind."""
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return {}
    return dict(bound.arguments)


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Decorator to create a span around a coroutine function.

    Allowlisted parameters (ids, status, counts) are recorded whether they
    are passed positionally or by keyword.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional dict of attributes to set on the span.

    Returns:
        Decorated function.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"@traced requires a coroutine function, got {func!r}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _setup_span(span, attributes, _bound_arguments(signature, args, kwargs))
                return await _run_in_span_async(span, lambda: func(*args, **kwargs))

        return wrapper

    return decorator


# Only these parameter names are recorded as span attributes (case-insensitive).
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "id", "name", "count", "limit", "status", "new_status", "kind",
    "campus_id", "admin_id", "entity_type", "entity_id", "prefix",
})


def _set_safe_span_attrs(span: trace.Span, arguments: dict) -> None:
    """Set span attributes from bound arguments; only allowlisted names are recorded."""
    for key, value in arguments.items():
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
