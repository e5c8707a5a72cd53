"""Tests for health probes."""

import pytest
from httpx import AsyncClient

from talentnest.api.v1.endpoints import health


def fake_check(result: bool):
    async def check() -> bool:
        return result

    return check


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for /health, /health/detailed and /ping."""

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_ping(self, client: AsyncClient):
        response = await client.get("/api/v1/ping")

        assert response.json() == {"message": "pong"}

    @pytest.mark.parametrize(
        ("db_up", "redis_up", "status_code", "overall"),
        [
            (True, True, 200, "healthy"),
            (True, False, 200, "degraded"),
            (False, True, 503, "unhealthy"),
        ],
    )
    async def test_readiness(
        self, client: AsyncClient, monkeypatch, db_up, redis_up, status_code, overall
    ):
        monkeypatch.setattr(health, "check_database_connection", fake_check(db_up))
        monkeypatch.setattr(health, "check_redis_connection", fake_check(redis_up))

        response = await client.get("/api/v1/health/detailed")

        assert response.status_code == status_code
        body = response.json()
        assert body["status"] == overall
        assert body["database"] == ("healthy" if db_up else "unhealthy")
        assert body["redis"] == ("healthy" if redis_up else "unhealthy")
