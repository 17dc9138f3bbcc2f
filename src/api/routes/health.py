"""
Health check: проба БД (SELECT 1) с замером времени ответа.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.responses import envelope
from src.infrastructure.config.database import check_database_connection, get_db_session
from src.infrastructure.config.settings import get_settings
from src.shared.utils.text import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """Health check endpoint (503, если БД недоступна)."""
    started = time.perf_counter()
    error = None
    try:
        connected = await check_database_connection(session)
    except Exception as e:
        logger.error(f"Database health probe failed: {e}")
        connected = False
        error = str(e)

    data = {
        "status": "ok" if connected else "error",
        "timestamp": utcnow().isoformat() + "Z",
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "database": "connected" if connected else "disconnected",
        "version": get_settings().app_version,
        "responseTime": round((time.perf_counter() - started) * 1000, 2),
    }

    if connected:
        return JSONResponse(content=envelope(True, "Service is healthy", data))
    return JSONResponse(
        status_code=503,
        content=envelope(False, "Service is unhealthy", data, errors=[error or "Database probe failed"]),
    )
