"""
Liveness, readiness and database pool health.
"""

import time

from fastapi import APIRouter

from networknote.config import settings
from networknote.db.pool import db_health_check
from networknote.infrastructure.observability.logging import log_readiness

router = APIRouter(tags=["health"])


def _configuration_issues() -> list[str]:
    issues = []
    if not settings.SUPABASE_ANON_KEY:
        issues.append("SUPABASE_ANON_KEY not set")
    # A remote FUNCTIONS_BASE_URL holds its own gateway key
    if not settings.AI_GATEWAY_API_KEY and not settings.FUNCTIONS_BASE_URL:
        issues.append("AI_GATEWAY_API_KEY not set")
    return issues


@router.get("/healthz")
async def healthz():
    """Process is up."""
    return {"status": "ok", "service": "networknote"}


@router.get("/readyz")
async def readyz():
    """Database pool plus required configuration. Always 200; see overall_ok."""
    started = time.perf_counter()
    db_health = await db_health_check()
    latency_ms = round((time.perf_counter() - started) * 1000, 1)

    db_ok = bool(db_health.get("healthy", False))
    database = {"ok": db_ok, "latency_ms": latency_ms}
    pool_stats = db_health.get("pool_stats")
    if pool_stats:
        database.update(
            pool_size=pool_stats.get("pool_size", 0),
            pool_available=pool_stats.get("pool_available", 0),
            pool_utilization_percent=pool_stats.get("pool_utilization_percent", 0),
            connection_time_ms=db_health.get("connection_time_ms", 0),
        )
    if db_health.get("warnings"):
        database["warnings"] = db_health["warnings"]
    if not db_ok:
        database["error"] = db_health.get("error", "Database unhealthy")
    log_readiness("database", db_ok, latency_ms, database.get("error"))

    issues = _configuration_issues()
    configuration = {
        "ok": not issues,
        "issues": issues or None,
        "environment": settings.environment,
    }
    if issues:
        log_readiness("configuration", False, 0.0, "; ".join(issues))

    return {
        "overall_ok": db_ok and not issues,
        "checks": {"database": database, "configuration": configuration},
        "timestamp": time.time(),
    }


@router.get("/health/database")
async def database_health():
    return await db_health_check()
