"""Temporal worker - runs the downstream consumer."""
import asyncio
import logging
from temporalio.client import Client
from temporalio.worker import Worker

from app.core.config import settings
from app.temporal.workflows import IngestionAcceptedWorkflow
from app.temporal.activities import mark_ingestion_failed, process_ingestion_event

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main():
    """Run Temporal worker."""
    logger.info(f"Connecting to Temporal server at {settings.temporal_host}")
    
    # Connect to Temporal server
    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace
    )
    
    logger.info(f"Starting worker on channel: {settings.ingest_event_channel}")
    
    worker = Worker(
        client,
        task_queue=settings.ingest_event_channel,
        workflows=[IngestionAcceptedWorkflow],
        activities=[process_ingestion_event, mark_ingestion_failed]
    )
    
    logger.info("Worker started, waiting for ingest.accepted events...")
    await worker.run()


if __name__ == "__main__":
    asyncio.run(main())
