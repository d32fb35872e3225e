from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends
from recruitment.api.deps import get_db_session
from recruitment.core.config import get_settings
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_database(session: AsyncSession) -> dict:
    """Check the relational store connection."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok"}
    except (SQLAlchemyError, OSError) as e:
        return {"status": "error", "message": str(e)[:100]}


@router.get("/health", summary="Service health probe")
async def health_check(session: AsyncSession = Depends(get_db_session)) -> dict:
    """Return basic service and datastore status information."""
    settings = get_settings()
    database_status = await check_database(session)

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": "ok" if database_status.get("status") == "ok" else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {"database": database_status},
    }
    logger.info("health_probe", **payload)
    return payload
