"""Vendor-facing ingest and admin lookup endpoints."""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.api.dependencies import get_ingest_service, get_lookup_service
from app.application.services.ingest_submission import IngestSubmissionService
from app.application.services.lookup_ingest_record import LookupIngestRecordService
from app.core.request_context import get_request_id

logger = logging.getLogger(__name__)
router = APIRouter(tags=["ingest"])

API_KEY_HEADER = "X-Api-Key"


class IngestAcceptedResponse(BaseModel):
    """Response model for an admissible submission."""
    status: str
    ingestId: str


class IngestRecordView(BaseModel):
    """Read-only projection of an ingest record. Never includes payload bytes."""
    model_config = ConfigDict(populate_by_name=True)
    
    vendor_id: str = Field(alias="vendorId")
    external_event_id: str = Field(alias="externalEventId")
    ingest_id: str = Field(alias="ingestId")
    received_at: str = Field(alias="receivedAt")
    status: str
    s3_bucket: str = Field(alias="s3Bucket")
    s3_key: str = Field(alias="s3Key")


async def _submit(request: Request, service: IngestSubmissionService) -> JSONResponse:
    raw_body = await request.body()
    outcome = await service.accept(
        request.headers.get(API_KEY_HEADER),
        request.url.path,
        raw_body,
        request_id=get_request_id()
    )
    response = IngestAcceptedResponse(status=outcome.status.value, ingestId=outcome.ingest_id)
    return JSONResponse(status_code=202, content=response.model_dump())


@router.post("/{route_path:path}", status_code=202, response_model=IngestAcceptedResponse)
async def submit_event(
    request: Request,
    service: IngestSubmissionService = Depends(get_ingest_service)
):
    """
    Submit a vendor event.
    
    The path must end in ``/inventory-updates`` or ``/order-status-updates``.
    
    Returns:
        202 with ACCEPTED for a first submission or DUPLICATE for a repeat
    """
    return await _submit(request, service)


@router.get("/{route_path:path}", response_model=IngestRecordView)
async def get_ingest_record(
    request: Request,
    lookup_service: LookupIngestRecordService = Depends(get_lookup_service)
):
    """
    Look up an ingest record at ``[/<stage>]/admin/ingest/{vendorId}/{externalEventId}``.
    
    GETs outside the admin surface are authenticated and then rejected
    with UNKNOWN_ROUTE.
    """
    record = await lookup_service.lookup(
        request.headers.get(API_KEY_HEADER),
        request.url.path,
        request_id=get_request_id()
    )
    return IngestRecordView(
        vendor_id=record.vendor_id,
        external_event_id=record.external_event_id,
        ingest_id=record.ingest_id,
        received_at=record.received_at,
        status=record.status.value,
        s3_bucket=record.raw_location.bucket,
        s3_key=record.raw_location.key
    )
