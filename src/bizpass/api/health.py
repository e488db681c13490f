"""
Health check endpoint for monitoring and orchestration.

Reports uptime and data store connectivity. Always answers 200 so load
balancers can tell a degraded service from a dead one.
"""

import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.db import get_db
from bizpass.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

# Set in lifespan
_app_start_time: datetime | None = None


def set_app_start_time(start_time: datetime) -> None:
    global _app_start_time
    _app_start_time = start_time


def get_uptime_seconds() -> int:
    if _app_start_time is None:
        return 0
    return int((datetime.now() - _app_start_time).total_seconds())


async def check_database(db: AsyncSession) -> dict[str, Any]:
    """
    Run ``SELECT 1`` against the store.

    Returns: {"status": "ok"|"down", "response_time_ms": N, "error": str (if down)}
    """
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("health.database_down", error=type(exc).__name__)
        return {
            "status": "down",
            "response_time_ms": int((time.time() - start) * 1000),
            "error": type(exc).__name__,
        }
    return {
        "status": "ok",
        "response_time_ms": int((time.time() - start) * 1000),
    }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Example response (degraded):
        {
            "status": "degraded",
            "uptime_seconds": 3600,
            "checks": {"database": {"status": "down", "response_time_ms": 1000,
                                    "error": "OperationalError"}}
        }
    """
    db_check = await check_database(db)
    return JSONResponse(
        content={
            "status": "ok" if db_check["status"] == "ok" else "degraded",
            "uptime_seconds": get_uptime_seconds(),
            "checks": {"database": db_check},
        },
        status_code=status.HTTP_200_OK,
    )
