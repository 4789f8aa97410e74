"""
Health Check & Metrics Endpoints
=============================================================================
  1. /health (Liveness): "Is the process running?"
  2. /ready (Readiness): "Can it handle requests?" Checks the database.
  3. /metrics: Prometheus exposition format for the scraper.
=============================================================================
"""

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db.engine import get_db_session
from employee_service.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Liveness probe. Always 200 while the process is alive."""
    return {"status": "ok", "service": "employee-service"}


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db_session)):
    """Readiness probe. Runs `SELECT 1` against the database."""
    checks = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as e:
        logger.warning("readiness_check_failed", error=str(e))
        checks["database"] = f"error: {e.__class__.__name__}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "checks": checks,
    }


@router.get("/metrics", include_in_schema=False)
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
