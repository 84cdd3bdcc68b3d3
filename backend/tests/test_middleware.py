"""
Bloglist Backend — Middleware Tests
====================================

What:  Rate limiting and request-id propagation on a bare FastAPI app, so
       no database is involved.
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bloglist.middleware.logging import level_for_status
from bloglist.middleware.rate_limit import RateLimitMiddleware
from bloglist.middleware.request_id import RequestIDMiddleware, request_id_var


def _app(max_requests=2):
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"request_id": request_id_var.get("")}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60)
    return app


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_blocks_after_limit(self):
        async with _client(_app()) as client:
            assert (await client.get("/ping")).status_code == 200
            assert (await client.get("/ping")).status_code == 200
            blocked = await client.get("/ping")

        assert blocked.status_code == 429
        assert int(blocked.headers["Retry-After"]) >= 1
        assert "error" in blocked.json()

    @pytest.mark.asyncio
    async def test_health_is_exempt(self):
        async with _client(_app(max_requests=1)) as client:
            for _ in range(3):
                assert (await client.get("/health")).status_code == 200


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self):
        async with _client(_app(max_requests=100)) as client:
            response = await client.get("/ping")

        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    async def test_client_value_is_reused(self):
        async with _client(_app(max_requests=100)) as client:
            response = await client.get("/ping", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


@pytest.mark.parametrize(
    "status,level",
    [(200, logging.INFO), (204, logging.INFO), (401, logging.WARNING), (503, logging.ERROR)],
)
def test_access_log_level(status, level):
    assert level_for_status(status) == level
