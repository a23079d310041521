"""
Unit tests for middleware components.
"""

from __future__ import annotations

import pytest
import structlog
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from cabin_admin.middleware import RequestIDMiddleware


@pytest.fixture
def middleware_client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def test_endpoint(request: Request) -> dict[str, str]:
        bound = structlog.contextvars.get_contextvars()
        return {"request_id": request.state.request_id, "bound": bound.get("request_id", "")}

    return TestClient(app)


@pytest.mark.unit
def test_request_id_header_matches_state(middleware_client: TestClient) -> None:
    response = middleware_client.get("/test")

    assert response.status_code == 200
    assert len(response.headers["X-Request-ID"]) == 36  # UUID length
    assert response.headers["X-Request-ID"] == response.json()["request_id"]


@pytest.mark.unit
def test_request_id_is_bound_for_logging(middleware_client: TestClient) -> None:
    response = middleware_client.get("/test")

    assert response.json()["bound"] == response.headers["X-Request-ID"]


@pytest.mark.unit
def test_request_id_unique_per_request(middleware_client: TestClient) -> None:
    first = middleware_client.get("/test").headers["X-Request-ID"]
    second = middleware_client.get("/test").headers["X-Request-ID"]

    assert first != second
