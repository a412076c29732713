"""Request correlation ids.

Every request gets an id that flows through logs and is returned in the
``X-Request-ID`` response header and in error envelopes.
"""
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_var: ContextVar[str] = ContextVar("request_id", default="unknown")


def get_request_id() -> str:
    """
    Get the current request's correlation id.
    
    Returns:
        The id for the current request, or "unknown" outside a request
    """
    return _request_id_var.get()


def set_request_id(request_id: str) -> None:
    """Set the correlation id for the current context."""
    _request_id_var.set(request_id)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation id to each request, reusing an inbound one if present."""
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_request_id(request_id)
        
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
