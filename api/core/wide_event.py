"""Request-scoped wide event for canonical log lines.

One dict per request accumulates context (which category/product was touched,
slow queries, rejected operations). RequestTimingMiddleware creates it at
request start and logs it once as ``request.completed``.

Usage:
    from core.wide_event import set_wide_event_fields

    set_wide_event_fields(product_id=product.id, category_id=product.category_id)
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any]] = ContextVar("wide_event")


def init_wide_event() -> dict[str, Any]:
    """Start a fresh wide event for the current async context."""
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Return the current wide event, or an empty dict outside a request."""
    try:
        return _wide_event.get()
    except LookupError:
        return {}


def set_wide_event_field(key: str, value: Any) -> None:
    """Set a single field. No-op outside request context (CLI, tests)."""
    event = get_wide_event()
    if event:
        event[key] = value


def set_wide_event_fields(**kwargs: Any) -> None:
    """Set several fields. No-op outside request context (CLI, tests)."""
    event = get_wide_event()
    if event:
        event.update(kwargs)


def clear_wide_event() -> None:
    _wide_event.set({})
