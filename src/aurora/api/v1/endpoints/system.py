"""Index and health endpoints for the Aurora API."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from aurora.core.settings import settings

from ..dependencies import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "project": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


@router.get("/health")
def health_check(db: SessionDep) -> dict[str, object]:
    """Health check endpoint to verify the service and its database are reachable."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        db_status = f"unhealthy: {e}"

    return {
        "status": "ok" if db_status == "healthy" else "degraded",
        "components": {"database": db_status},
        "version": settings.app_version,
    }
