"""Health check endpoint — database connectivity and configuration."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from taskboard.db import database

router = APIRouter()

VERSION = "0.3.0"


class HealthStatus(BaseModel):
    status: str  # "healthy" | "unhealthy"
    version: str
    checks: dict[str, dict]
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
def health_check() -> HealthStatus:
    """Check that the database answers a trivial query."""
    checks: dict[str, dict] = {}
    healthy = True

    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        checks["database"] = {"status": "ok", "detail": database.engine.dialect.name}
    except Exception as e:
        checks["database"] = {"status": "error", "detail": str(e)[:200]}
        healthy = False

    return HealthStatus(
        status="healthy" if healthy else "unhealthy",
        version=VERSION,
        checks=checks,
        timestamp=datetime.now(timezone.utc),
    )
