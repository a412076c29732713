"""Domain errors with stable, client-facing error codes."""
from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes returned in the error envelope."""
    MISSING_API_KEY = "MISSING_API_KEY"
    INVALID_API_KEY = "INVALID_API_KEY"
    INVALID_JSON = "INVALID_JSON"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    VENDOR_ID_NOT_ALLOWED = "VENDOR_ID_NOT_ALLOWED"
    BAD_PATH = "BAD_PATH"
    FORBIDDEN = "FORBIDDEN"
    UNKNOWN_ROUTE = "UNKNOWN_ROUTE"
    NOT_FOUND = "NOT_FOUND"
    MISSING_ENV = "MISSING_ENV"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_CODES = {
    ErrorCode.MISSING_API_KEY: 401,
    ErrorCode.INVALID_API_KEY: 401,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.VENDOR_ID_NOT_ALLOWED: 400,
    ErrorCode.BAD_PATH: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.UNKNOWN_ROUTE: 404,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.MISSING_ENV: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}


class IngestError(Exception):
    """
    Error that is reported to the caller as an error envelope.
    
    Attributes:
        code: Stable error code
        message: Human-readable message, safe to return to the client
        status_code: HTTP status derived from the code
    """
    
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = STATUS_CODES[code]
    
    def __repr__(self) -> str:
        return f"IngestError({self.code.value}, {self.message!r})"


class MissingConfigurationError(Exception):
    """A required destination name is not configured."""
    
    def __init__(self, name: str):
        super().__init__(f"Missing required environment variable: {name}")
        self.name = name


class ArchiveObjectNotFound(Exception):
    """No archived object exists at the requested location."""
    
    def __init__(self, bucket: str, key: str):
        super().__init__(f"No archived object at {bucket}/{key}")
        self.bucket = bucket
        self.key = key


class ArchiveObjectExists(Exception):
    """An archived object already exists at the requested location."""
    
    def __init__(self, bucket: str, key: str):
        super().__init__(f"Archived object already exists at {bucket}/{key}")
        self.bucket = bucket
        self.key = key
