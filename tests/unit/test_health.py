"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from networknote.main import app

client = TestClient(app)

HEALTHY_DB = {
    "healthy": True,
    "connection_time_ms": 1.2,
    "pool_stats": {"pool_size": 4, "pool_available": 3, "pool_utilization_percent": 25.0},
}


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "networknote"}


def test_readyz_all_healthy():
    with (
        patch("networknote.routes.health.db_health_check", AsyncMock(return_value=HEALTHY_DB)),
        patch("networknote.routes.health.settings.SUPABASE_ANON_KEY", "anon"),
        patch("networknote.routes.health.settings.AI_GATEWAY_API_KEY", "key"),
    ):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["database"]["pool_size"] == 4
    assert data["checks"]["configuration"]["issues"] is None


def test_readyz_database_down():
    """Readiness still answers 200 but reports the failure."""
    unhealthy = {"healthy": False, "error": "Database pool not initialized"}
    with (
        patch("networknote.routes.health.db_health_check", AsyncMock(return_value=unhealthy)),
        patch("networknote.routes.health.settings.SUPABASE_ANON_KEY", "anon"),
        patch("networknote.routes.health.settings.AI_GATEWAY_API_KEY", "key"),
    ):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "Database pool not initialized"


def test_readyz_missing_configuration():
    with (
        patch("networknote.routes.health.db_health_check", AsyncMock(return_value=HEALTHY_DB)),
        patch("networknote.routes.health.settings.SUPABASE_ANON_KEY", ""),
        patch("networknote.routes.health.settings.AI_GATEWAY_API_KEY", "key"),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["configuration"]["issues"] == ["SUPABASE_ANON_KEY not set"]


def test_database_health_passthrough():
    with patch("networknote.routes.health.db_health_check", AsyncMock(return_value=HEALTHY_DB)):
        response = client.get("/health/database")

    assert response.json()["healthy"] is True
