"""
Health check endpoints.

Provides basic liveness and a detailed check including database connectivity.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear import __version__
from toolwear.core.config import get_settings
from toolwear.core.database import get_db
from toolwear.core.logging import get_logger
from toolwear.utils.dates import utcnow

logger = get_logger(__name__)

router = APIRouter()

SERVICE_NAME = "tool-wear-monitor"


def _base_payload() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": utcnow().isoformat(),
        "environment": get_settings().environment,
    }


@router.get("", summary="Basic Health Check")
@router.get("/", summary="Basic Health Check", include_in_schema=False)
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Basic service status and metadata
    """
    return _base_payload()


@router.get("/detailed", summary="Detailed Health Check")
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """
    Detailed health check with a database round-trip.

    Returns 200 when every check passes and 503 otherwise.
    """
    settings = get_settings()
    health_data = _base_payload()
    health_data["checks"] = {}

    try:
        result = await db.execute(text("SELECT 1 AS health_check"))
        row = result.fetchone()
        if row is None or row[0] != 1:
            raise SQLAlchemyError("Invalid health check response")
        health_data["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", error=str(e))
        health_data["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {e}",
        }
        health_data["status"] = "unhealthy"

    health_data["checks"]["configuration"] = {
        "status": "healthy",
        "message": "Configuration loaded successfully",
        "plant_timezone": settings.plant_timezone,
    }

    if health_data["status"] != "healthy":
        return JSONResponse(status_code=503, content=health_data)
    return health_data
