"""Health check endpoints."""
import logging
from fastapi import APIRouter
from sqlalchemy import text
from temporalio.client import Client

from app.core.config import settings
from app.core.database import SessionLocal

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """
    Basic liveness check.

    Returns:
        Health status and whether ingest destinations are configured
    """
    return {
        "status": "healthy",
        "destinations_configured": bool(settings.raw_bucket.strip() and settings.ingest_event_channel.strip())
    }


@router.get("/db")
async def database_health():
    """
    Check connectivity to the idempotency store and raw archive.

    Returns:
        Database health status
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.warning(f"Database health check failed: {e!r}")
        return {"status": "unhealthy", "database": "disconnected"}
    finally:
        db.close()


@router.get("/temporal")
async def temporal_health():
    """
    Check connectivity to the ingestion event channel.

    Returns:
        Temporal health status
    """
    try:
        await Client.connect(
            settings.temporal_host,
            namespace=settings.temporal_namespace
        )
        return {"status": "healthy", "temporal": "connected", "channel": settings.ingest_event_channel}
    except Exception as e:
        logger.warning(f"Temporal health check failed: {e!r}")
        return {"status": "unhealthy", "temporal": "disconnected"}
