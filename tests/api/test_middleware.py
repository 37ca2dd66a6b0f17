"""
Tests for access logging, recovery and CORS middleware.
"""

from typing import List

import pytest
from httpx import ASGITransport, AsyncClient
from loguru import logger

from app.api.middleware import get_request_id
from app.main import create_application

pytestmark = pytest.mark.asyncio


@pytest.fixture
def log_messages():
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="INFO")
    yield messages
    logger.remove(handler_id)


async def test_access_log_line(bare_client: AsyncClient, log_messages: List[str]) -> None:
    response = await bare_client.get("/health")

    assert response.status_code == 200
    access_lines = [m for m in log_messages if m.startswith("[HTTP]")]
    assert len(access_lines) == 1
    assert "200" in access_lines[0]
    assert "GET" in access_lines[0]
    assert access_lines[0].endswith("/health")


async def test_metrics_requests_are_not_logged(bare_client: AsyncClient, log_messages: List[str]) -> None:
    await bare_client.get("/metrics")
    await bare_client.get("/metrics/prometheus")

    assert not [m for m in log_messages if m.startswith("[HTTP]")]


async def test_paths_resembling_metrics_are_logged(bare_client: AsyncClient, log_messages: List[str]) -> None:
    response = await bare_client.get("/metricsfoo")

    assert response.status_code == 404
    access_lines = [m for m in log_messages if m.startswith("[HTTP]")]
    assert len(access_lines) == 1
    assert access_lines[0].endswith("/metricsfoo")


async def test_request_id_header(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/health")
    assert response.headers["X-Request-ID"]

    response = await bare_client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_outside_request() -> None:
    assert get_request_id() == ""


async def test_unhandled_exception_is_recovered() -> None:
    application = create_application()
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="INFO")

    @application.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as ac:
        response = await ac.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

        # The app keeps serving after the failure
        response = await ac.get("/health")
        assert response.status_code == 200

    logger.remove(handler_id)
    assert any("kaboom" in m for m in messages)
    assert any(m.startswith("[HTTP] 500") for m in messages)


async def test_cors_headers(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/health", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"

    response = await bare_client.options(
        "/categories/",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert "POST" in response.headers["access-control-allow-methods"]
