"""Liveness and database reachability."""

import time

from fastapi import APIRouter

from src.application.dto.responses import HealthResponse
from src.config import get_logger, get_settings
from src.infrastructure.storage.sqlite import get_connection

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


async def _probe_database() -> str:
    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        return f"error: {e}"
    return "ok"


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Always 200; ``status`` is "degraded" when SQLite does not answer."""
    database = await _probe_database()
    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=get_settings().app_version,
        uptime_seconds=round(time.monotonic() - _started_at, 3),
        database=database,
    )
