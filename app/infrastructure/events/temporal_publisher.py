"""Event publisher that announces ingestions by starting Temporal workflows."""
import logging
from typing import Optional
from temporalio.client import Client
from temporalio.exceptions import WorkflowAlreadyStartedError

from app.domain.models.ingestion_event import INGEST_ACCEPTED, IngestionEvent
from app.domain.ports.event_publisher import EventPublisher
from app.temporal.workflows import IngestionAcceptedWorkflow

logger = logging.getLogger(__name__)


def workflow_id_for(ingest_id: str) -> str:
    """Workflow id for the consumer run of one ingestion."""
    return f"{INGEST_ACCEPTED.replace('.', '-')}-{ingest_id}"


class TemporalEventPublisher(EventPublisher):
    """
    Publishes each accepted ingestion as one consumer workflow run.
    
    The channel is the Temporal task queue the consumer worker polls.
    Workflow ids are derived from the ingest id, so re-publishing the same
    ingestion does not start a second run.
    """
    
    def __init__(
        self,
        host: str,
        namespace: str,
        max_attempts: int = 3,
        client: Optional[Client] = None
    ):
        """
        Initialize publisher.
        
        Args:
            host: Temporal server host
            namespace: Temporal namespace
            max_attempts: Fetch attempts before the consumer dead-letters
            client: Pre-connected client, connected lazily if omitted
        """
        self.host = host
        self.namespace = namespace
        self.max_attempts = max_attempts
        self._client = client
    
    async def _get_client(self) -> Client:
        if self._client is None:
            self._client = await Client.connect(self.host, namespace=self.namespace)
        return self._client
    
    async def publish(self, event: IngestionEvent, channel: str) -> None:
        """Start the consumer workflow for an accepted ingestion."""
        client = await self._get_client()
        workflow_id = workflow_id_for(event.ingest_id)
        
        try:
            await client.start_workflow(
                IngestionAcceptedWorkflow.run,
                args=[event.to_detail(), self.max_attempts],
                id=workflow_id,
                task_queue=channel
            )
        except WorkflowAlreadyStartedError:
            logger.info(f"Workflow {workflow_id} already started, event already published")
            return
        
        logger.info(f"Published {INGEST_ACCEPTED} for {event.ingest_id} on {channel}")
