"""
Health endpoints for orchestration probes.

- /health, /health/live: liveness, always 200 while the process runs
- /health/db: the booking store answers queries
- /health/ready: store reachable and payment provider circuit not open
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.deps import get_db_session
from rentals.config import Settings, get_settings
from rentals.infrastructure.circuit_breaker import stripe_breaker
from rentals.infrastructure.db.tables import booking_nights

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rentals-reservations"


async def _database_status(settings: Settings, session: AsyncSession) -> str:
    if settings.use_in_memory:
        return "in_memory"
    try:
        await session.execute(text("SELECT 1"))
        # The exclusion table must exist or no booking can be written.
        await session.execute(select(booking_nights.c.night).limit(1))
    except SQLAlchemyError as exc:
        logger.error("Database health check failed", exc_info=exc)
        return "unhealthy"
    return "healthy"


@router.get("/health")
@router.get("/health/live")
async def health_check():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_db_session),
):
    db_status = await _database_status(settings, session)
    if db_status == "unhealthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed",
            },
        )
    return {"status": db_status, "component": "database"}


@router.get("/health/ready")
async def health_check_ready(
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_db_session),
):
    checks = {
        "database": await _database_status(settings, session),
        "payment_provider": stripe_breaker.current_state,
    }
    ready = checks["database"] != "unhealthy" and checks["payment_provider"] != "open"
    body = {"status": "ready" if ready else "not_ready", "checks": checks}
    if not ready:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
