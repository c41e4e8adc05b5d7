"""
Tests for the request size limit middleware.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from alert_bicep.core.middleware import RequestSizeLimitMiddleware


@pytest.fixture
def small_app() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=1)

    @app.post("/echo")
    async def echo(payload: dict) -> dict:
        return {"keys": len(payload)}

    return TestClient(app)


class TestRequestSizeLimit:
    @pytest.mark.anyio
    async def test_small_body_passes(self, small_app):
        response = small_app.post("/echo", json={"a": 1})

        assert response.status_code == 200
        assert response.json() == {"keys": 1}

    @pytest.mark.anyio
    async def test_large_body_rejected(self, small_app):
        response = small_app.post(
            "/echo",
            content=b'{"a": "' + b"x" * (1024 * 1024) + b'"}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 413
        assert response.json()["error"] == "RequestTooLarge"

    @pytest.mark.anyio
    async def test_app_enforces_limit(self, client):
        response = client.post(
            "/api/v1/templates/service-health-alert",
            content=b"x" * (2 * 1024 * 1024),
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 413
