"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends, Request

from second_brain import __version__
from second_brain.api.dependencies import get_pool
from second_brain.application.dto.responses import HealthResponse, ProviderHealthResponse
from second_brain.infrastructure.storage.sqlite import ConnectionPool

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    request: Request,
    pool: ConnectionPool | None = Depends(get_pool),
) -> HealthResponse:
    """
    Service status with a database round trip.

    Integration flags report configuration only; no remote call is made.
    """
    db_status = ProviderHealthResponse(name="sqlite", available=False)
    if pool is not None:
        try:
            start = time.time()
            async with pool.acquire() as conn:
                await conn.execute("SELECT 1")
            db_status = ProviderHealthResponse(
                name="sqlite",
                available=True,
                latency_ms=(time.time() - start) * 1000,
            )
        except Exception as e:
            db_status.error = str(e)
    else:
        db_status.error = "connection pool not initialized"

    calendar = getattr(request.app.state, "calendar_bridge", None)
    backup_configured = getattr(request.app.state, "backup_configured", None)

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
        calendar_sync=calendar.enabled if calendar is not None else None,
        backup_configured=backup_configured,
    )
