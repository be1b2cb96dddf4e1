"""Request timing middleware and the canonical ``request.completed`` line.

Each HTTP request gets a request id (the caller's ``X-Request-Id`` when it
sends one) that is bound into structlog's contextvars, so every log line
written while handling the request carries it. The request's wide event is
logged once at the end when the request failed, was slow, or changed data.
"""

import os
import time
import uuid

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import get_logger
from core.wide_event import clear_wide_event, get_wide_event, init_wide_event

logger = get_logger(__name__)

SERVICE_NAME = os.getenv("SERVICE_NAME", "stockroom-api")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "0.1.0")

SLOW_REQUEST_THRESHOLD_MS = 1000

_READ_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
_MAX_REQUEST_ID_LENGTH = 128


def _incoming_request_id(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == b"x-request-id":
            request_id = value.decode("latin-1").strip()
            if 0 < len(request_id) <= _MAX_REQUEST_ID_LENGTH:
                return request_id
    return None


def _should_emit(method: str, status_code: int | None, duration_ms: float) -> bool:
    if status_code is None or status_code >= 400:
        return True
    if duration_ms > SLOW_REQUEST_THRESHOLD_MS:
        return True
    return method not in _READ_METHODS


class RequestTimingMiddleware:
    """Pure ASGI middleware; adds X-Request-Id and X-Request-Duration-Ms."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        client = scope.get("client")
        request_id = _incoming_request_id(scope) or str(uuid.uuid4())

        init_wide_event().update(
            service_name=SERVICE_NAME,
            service_version=SERVICE_VERSION,
            request_id=request_id,
            http_method=method,
            http_path=path,
            http_client_ip=client[0] if client else "unknown",
        )
        structlog.contextvars.bind_contextvars(request_id=request_id)

        status_code: int | None = None
        finished = False

        def elapsed_ms() -> float:
            return (time.perf_counter() - started) * 1000

        def finish(**fields) -> None:
            nonlocal finished
            if finished:
                return
            finished = True
            duration_ms = elapsed_ms()
            event = get_wide_event()
            route = scope.get("route")
            event.update(
                http_route=getattr(route, "path", None) or path,
                http_status_code=status_code,
                duration_ms=round(duration_ms, 2),
                **fields,
            )
            if "exception_type" in fields or _should_emit(
                method, status_code, duration_ms
            ):
                logger.info("request.completed", **event)
            clear_wide_event()
            structlog.contextvars.unbind_contextvars("request_id")

        async def send_with_timing(message: Message) -> None:
            nonlocal status_code

            if message["type"] == "http.response.start":
                status_code = int(message["status"])
                message["headers"] = [
                    *message.get("headers", []),
                    (b"x-request-duration-ms", f"{elapsed_ms():.2f}".encode()),
                    (b"x-request-id", request_id.encode("latin-1")),
                ]
            elif message["type"] == "http.response.body" and not message.get(
                "more_body", False
            ):
                finish(
                    outcome="success"
                    if status_code is not None and status_code < 400
                    else "error"
                )

            await send(message)

        try:
            await self.app(scope, receive, send_with_timing)
        except Exception as exc:
            finish(outcome="exception", exception_type=type(exc).__name__)
            raise
