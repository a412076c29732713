"""Temporal workflows - orchestration only, no business logic."""
from datetime import timedelta
from temporalio import workflow
from temporalio.common import RetryPolicy
from temporalio.exceptions import ActivityError

with workflow.unsafe.imports_passed_through():
    from app.temporal.activities import mark_ingestion_failed, process_ingestion_event


@workflow.defn
class IngestionAcceptedWorkflow:
    """
    Consumer run for one accepted ingestion.
    
    One workflow instance per ingest id.
    
    Responsibilities:
    - Fetch the archived payload and normalize it, with backoff
    - Dead-letter the ingestion once attempts are exhausted
    
    NO business logic, NO DB access, NO HTTP calls.
    """
    
    @workflow.run
    async def run(self, detail: dict, max_attempts: int = 3) -> str:
        """
        Process one ingest.accepted event.
        
        Args:
            detail: Event detail as published
            max_attempts: Fetch attempts before dead-lettering
            
        Returns:
            ProcessingOutcome value
        """
        workflow.logger.info(f"Starting consumer workflow for {detail.get('ingestId')}")
        
        try:
            return await workflow.execute_activity(
                process_ingestion_event,
                detail,
                start_to_close_timeout=timedelta(minutes=5),
                retry_policy=RetryPolicy(
                    initial_interval=timedelta(seconds=1),
                    maximum_interval=timedelta(minutes=1),
                    maximum_attempts=max_attempts,
                    backoff_coefficient=2.0
                )
            )
        except ActivityError as e:
            workflow.logger.error(f"Processing failed after {max_attempts} attempts: {e}")
        
        return await workflow.execute_activity(
            mark_ingestion_failed,
            detail,
            start_to_close_timeout=timedelta(minutes=1),
            retry_policy=RetryPolicy(
                initial_interval=timedelta(seconds=1),
                maximum_interval=timedelta(minutes=5),
                backoff_coefficient=2.0
            )
        )
