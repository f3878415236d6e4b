"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from vetclinic.core.dependencies import get_db_session
from vetclinic.schemas.envelope import failure, success

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness: the process is up."""
    return success({"status": "healthy"}, "Service is running.")


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db_session)):
    """Readiness: the database answers a trivial query."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("health.ready.database_unreachable")
        return JSONResponse(status_code=503, content=failure("Database unavailable.").model_dump())
    return success({"status": "ready", "database": "connected"}, "Service is ready.")
