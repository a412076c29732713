"""Submission policy domain service - admission rules for vendor payloads."""
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from app.domain.errors import ErrorCode, IngestError
from app.domain.models.ingest_record import EventType


@dataclass(frozen=True)
class ValidatedSubmission:
    """A submission that passed every admission rule."""
    event_type: EventType
    external_event_id: str
    document: Dict[str, Any]


class SubmissionPolicy:
    """
    Domain service for validating vendor submissions.
    
    Rules are checked in a fixed order and fail fast on the first
    violation. This is pure business logic with no infrastructure
    dependencies.
    """
    
    EXTERNAL_EVENT_ID = "externalEventId"
    VENDOR_ID = "vendorId"
    
    ROUTE_SUFFIXES: Tuple[Tuple[str, EventType], ...] = (
        ("/inventory-updates", EventType.INVENTORY_UPDATE),
        ("/order-status-updates", EventType.ORDER_STATUS_UPDATE),
    )
    
    # Order matters: the first missing field is the one reported
    REQUIRED_FIELDS: Dict[EventType, Tuple[str, ...]] = {
        EventType.INVENTORY_UPDATE: ("vendorProductKey", "unit", "semantics"),
        EventType.ORDER_STATUS_UPDATE: ("vendorOrderKey", "status"),
    }
    
    @staticmethod
    def parse_document(raw_body: Optional[bytes]) -> Dict[str, Any]:
        """
        Parse the request body into a JSON object.
        
        Args:
            raw_body: Body bytes as received
            
        Returns:
            Parsed JSON object
            
        Raises:
            IngestError: INVALID_JSON if the body is blank or not a JSON object
        """
        if raw_body is None or not raw_body.strip():
            raise IngestError(ErrorCode.INVALID_JSON, "Request body is required.")
        
        try:
            document = json.loads(raw_body)
        except (UnicodeDecodeError, ValueError):
            raise IngestError(ErrorCode.INVALID_JSON, "Request body must be valid JSON.")
        
        if not isinstance(document, dict):
            raise IngestError(ErrorCode.INVALID_JSON, "Request body must be a JSON object.")
        return document
    
    @staticmethod
    def field_value(document: Dict[str, Any], name: str) -> Optional[str]:
        """
        Get a scalar field as a non-blank string.
        
        Args:
            document: Parsed request body
            name: Field name
            
        Returns:
            The value as a string, or None if absent, null, blank or not a scalar
        """
        value = document.get(name)
        if value is None or isinstance(value, (dict, list)):
            return None
        if isinstance(value, bool):
            value = "true" if value else "false"
        text = str(value)
        return text if text.strip() else None
    
    @classmethod
    def resolve_route(cls, route_path: str) -> Optional[EventType]:
        """
        Map a route path to the event type it accepts.
        
        Args:
            route_path: Request path
            
        Returns:
            EventType for a recognized suffix, None otherwise
        """
        path = route_path or ""
        for suffix, event_type in cls.ROUTE_SUFFIXES:
            if path.endswith(suffix):
                return event_type
        return None
    
    @classmethod
    def validate(cls, raw_body: Optional[bytes], route_path: str) -> ValidatedSubmission:
        """
        Apply every admission rule to a submission.
        
        Args:
            raw_body: Body bytes as received
            route_path: Request path
            
        Returns:
            ValidatedSubmission for an admissible request
            
        Raises:
            IngestError: For the first rule the submission violates
        """
        document = cls.parse_document(raw_body)
        
        external_event_id = cls.field_value(document, cls.EXTERNAL_EVENT_ID)
        if external_event_id is None:
            raise IngestError(
                ErrorCode.MISSING_REQUIRED_FIELD,
                f"{cls.EXTERNAL_EVENT_ID} is required."
            )
        
        # Tenancy comes from the API key, never from the body
        if cls.VENDOR_ID in document:
            raise IngestError(
                ErrorCode.VENDOR_ID_NOT_ALLOWED,
                "vendorId must not be provided in the request body."
            )
        
        event_type = cls.resolve_route(route_path)
        if event_type is None:
            raise IngestError(ErrorCode.UNKNOWN_ROUTE, f"Unknown route: {route_path}")
        
        for name in cls.REQUIRED_FIELDS[event_type]:
            if cls.field_value(document, name) is None:
                raise IngestError(ErrorCode.MISSING_REQUIRED_FIELD, f"{name} is required.")
        
        return ValidatedSubmission(
            event_type=event_type,
            external_event_id=external_event_id,
            document=document
        )
