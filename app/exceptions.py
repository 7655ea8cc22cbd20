import logging
from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GalleryError(Exception):
    """Base class for errors that map onto an API response."""

    status_code: int = 500
    public_message: Optional[str] = None

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.public_message or self.message


class ValidationError(GalleryError):
    """Bad file type/size, missing file or malformed input. Surfaced verbatim."""

    status_code = 400


class UploadCancelledError(ValidationError):
    def __init__(self, message: str = "Upload cancelled"):
        super().__init__(message)


class AuthorizationError(GalleryError):
    status_code = 401
    public_message = "Unauthorized"


class NotFoundError(GalleryError):
    status_code = 404


class ConflictError(GalleryError):
    status_code = 400


class ProcessingError(GalleryError):
    """Decode/encode failure. The underlying error is logged, never returned."""

    status_code = 500
    public_message = "Image processing failed"


class StorageError(GalleryError):
    """Object store put/delete failure."""

    status_code = 500
    public_message = "Image storage failed"


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


def create_success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Create a standardized success response"""
    response = {
        "success": True,
        "data": data,
        "error": None
    }
    if message:
        response["message"] = message
    return response


async def gallery_exception_handler(request: Request, exc: GalleryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    # Convert 403 from HTTPBearer to 401 for missing authentication
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Unauthorized", 401)
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(
        status_code=400,
        content=create_error_response(message, 400)
    )
