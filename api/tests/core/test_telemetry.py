"""Unit tests for RequestTimingMiddleware.

Checks the response headers and when the canonical ``request.completed``
line is emitted.
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from core.telemetry import RequestTimingMiddleware
from core.wide_event import set_wide_event_fields


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestTimingMiddleware)

    @app.get("/items")
    async def read_items():
        return {"ok": True}

    @app.post("/items")
    async def create_item():
        set_wide_event_fields(product_id="p1")
        return {"ok": True}

    @app.get("/missing")
    async def missing():
        raise HTTPException(status_code=404, detail="nope")

    return app


@pytest.fixture
async def timed_client():
    async with AsyncClient(
        transport=ASGITransport(app=_build_app()), base_url="http://test"
    ) as ac:
        yield ac


def _completed_events(mock_logger) -> list[dict]:
    return [
        call.kwargs
        for call in mock_logger.info.call_args_list
        if call.args and call.args[0] == "request.completed"
    ]


@pytest.mark.unit
class TestRequestTimingMiddleware:
    async def test_adds_request_headers(self, timed_client: AsyncClient):
        response = await timed_client.get("/items")

        assert response.status_code == 200
        assert response.headers["x-request-id"]
        assert float(response.headers["x-request-duration-ms"]) >= 0

    async def test_fast_successful_get_is_not_logged(
        self, timed_client: AsyncClient
    ):
        with patch("core.telemetry.logger") as mock_logger:
            await timed_client.get("/items")

        assert _completed_events(mock_logger) == []

    async def test_mutation_is_logged_with_service_fields(
        self, timed_client: AsyncClient
    ):
        with patch("core.telemetry.logger") as mock_logger:
            await timed_client.post("/items")

        [event] = _completed_events(mock_logger)
        assert event["http_method"] == "POST"
        assert event["http_status_code"] == 200
        assert event["outcome"] == "success"
        assert event["product_id"] == "p1"

    async def test_error_response_is_logged(self, timed_client: AsyncClient):
        with patch("core.telemetry.logger") as mock_logger:
            await timed_client.get("/missing")

        [event] = _completed_events(mock_logger)
        assert event["http_status_code"] == 404
        assert event["outcome"] == "error"

    async def test_reuses_incoming_request_id(self, timed_client: AsyncClient):
        with patch("core.telemetry.logger") as mock_logger:
            response = await timed_client.post(
                "/items", headers={"X-Request-Id": "upstream-123"}
            )

        assert response.headers["x-request-id"] == "upstream-123"
        [event] = _completed_events(mock_logger)
        assert event["request_id"] == "upstream-123"
