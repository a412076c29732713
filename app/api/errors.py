"""Error envelope and exception handlers."""
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.request_context import REQUEST_ID_HEADER, get_request_id
from app.domain.errors import STATUS_CODES, ErrorCode, IngestError

logger = logging.getLogger(__name__)


class ErrorEnvelope(BaseModel):
    """Error body returned for every failed request."""
    error: str
    message: str
    requestId: str


def error_response(
    code: ErrorCode,
    message: str,
    status_code: Optional[int] = None,
    headers: Optional[dict] = None
) -> JSONResponse:
    """
    Build an error envelope response.
    
    Args:
        code: Stable error code
        message: Client-safe message
        status_code: Overrides the status mapped from the code
        headers: Extra response headers
        
    Returns:
        JSONResponse carrying the envelope and the request id header
    """
    request_id = get_request_id()
    envelope = ErrorEnvelope(error=code.value, message=message, requestId=request_id)
    return JSONResponse(
        status_code=status_code or STATUS_CODES[code],
        content=envelope.model_dump(),
        headers={**(headers or {}), REQUEST_ID_HEADER: request_id}
    )


async def ingest_error_handler(request: Request, exc: IngestError) -> JSONResponse:
    """Translate domain errors into the envelope."""
    if exc.status_code >= 500:
        logger.error(f"[{get_request_id()}] {exc.code.value}: {exc.message} ({request.url.path})")
    return error_response(exc.code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors raised by the framework (404, 405) in the envelope."""
    if exc.status_code == 404:
        return error_response(ErrorCode.UNKNOWN_ROUTE, f"Unknown route: {request.url.path}")
    if exc.status_code == 405:
        return error_response(
            ErrorCode.UNKNOWN_ROUTE,
            f"Method {request.method} not allowed on {request.url.path}",
            status_code=405,
            headers=exc.headers
        )
    if exc.status_code >= 500:
        logger.error(f"[{get_request_id()}] HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return error_response(ErrorCode.INTERNAL_ERROR, "Unexpected server error.", status_code=exc.status_code)
    return error_response(
        ErrorCode.UNKNOWN_ROUTE,
        str(exc.detail),
        status_code=exc.status_code,
        headers=exc.headers
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are malformed submissions."""
    logger.info(f"[{get_request_id()}] Request validation failed on {request.url.path}: {exc.errors()}")
    return error_response(ErrorCode.INVALID_JSON, "Request body must be valid JSON.")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Collapse anything unexpected into INTERNAL_ERROR without leaking details."""
    logger.error(f"[{get_request_id()}] Unhandled error on {request.url.path}: {exc!r}", exc_info=exc)
    return error_response(ErrorCode.INTERNAL_ERROR, "Unexpected server error.")


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on an application."""
    app.add_exception_handler(IngestError, ingest_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
