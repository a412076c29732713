"""FastAPI application entry point."""
import logging
from fastapi import FastAPI

from app.core.config import settings
from app.core.database import init_db
from app.core.request_context import RequestIdMiddleware
from app.api import gateway, health
from app.api.errors import register_error_handlers

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Vendor Event Ingestion Service",
    description="Idempotent ingestion of vendor inventory and order-status events with raw archival and fan-out",
    version="0.1.0"
)

app.add_middleware(RequestIdMiddleware)
register_error_handlers(app)

# Health routes first; the gateway router catches every other path
app.include_router(health.router)
app.include_router(gateway.router)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("Starting Vendor Event Ingestion Service")
    logger.info(f"Raw bucket: {settings.raw_bucket or '<unset>'}, event channel: {settings.ingest_event_channel}")

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Vendor Event Ingestion Service")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
