"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration


async def test_liveness_endpoint(client: AsyncClient):
    """Liveness endpoint should return 200 without a token."""
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


async def test_readiness_endpoint(client: AsyncClient):
    """Readiness endpoint should report a reachable database."""
    response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"


async def test_info_endpoint(client: AsyncClient):
    response = await client.get("/info")

    assert response.status_code == 200
    data = response.json()
    assert data["app"] == "Fitness Tracker API"
    assert "environment" in data


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health/live", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
