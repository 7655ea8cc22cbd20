import logging
import time
import uuid
from collections import defaultdict, deque
from typing import Deque, Dict, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import settings
from .exceptions import create_error_response

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
UPLOAD_PATH = "/api/upload"
# static image serving and health probes are never throttled
UNLIMITED_PREFIXES = ("/health", "/uploads/")


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute window per client.

    Uploads are decoded and re-encoded server side, so they draw from a
    separate, smaller allowance than ordinary API calls.
    """

    def __init__(self, app: ASGIApp, rate_limit: int = None, upload_rate_limit: int = None):
        super().__init__(app)
        self.rate_limit = rate_limit or settings.RATE_LIMIT_PER_MINUTE
        self.upload_rate_limit = upload_rate_limit or settings.UPLOAD_RATE_LIMIT_PER_MINUTE
        self.hits: Dict[Tuple[str, str], Deque[float]] = defaultdict(deque)
        self.last_sweep = time.monotonic()

    def _bucket(self, request: Request) -> Tuple[str, int]:
        if request.method == "POST" and request.url.path == UPLOAD_PATH:
            return "upload", self.upload_rate_limit
        return "api", self.rate_limit

    @staticmethod
    def _expire(window: Deque[float], now: float) -> None:
        while window and now - window[0] >= WINDOW_SECONDS:
            window.popleft()

    def sweep(self, now: float) -> None:
        """Forget clients whose whole window has expired."""
        for key in list(self.hits):
            self._expire(self.hits[key], now)
            if not self.hits[key]:
                del self.hits[key]
        self.last_sweep = now

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(UNLIMITED_PREFIXES):
            return await call_next(request)

        now = time.monotonic()
        if now - self.last_sweep >= WINDOW_SECONDS:
            self.sweep(now)

        bucket, limit = self._bucket(request)
        key = (client_address(request), bucket)
        window = self.hits[key]
        self._expire(window, now)

        if len(window) >= limit:
            retry_after = int(WINDOW_SECONDS - (now - window[0])) + 1
            logger.warning(f"Rate limit exceeded for {key[0]} on {bucket} requests")
            return JSONResponse(
                status_code=429,
                content=create_error_response("Rate limit exceeded. Please try again later.", 429),
                headers={"Retry-After": str(retry_after)},
            )

        window.append(now)
        return await call_next(request)


class SecurityMiddleware(BaseHTTPMiddleware):
    NO_STORE_PREFIXES = ("/api/admin", "/api/auth")

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # admin data and session responses must not be cached by browsers or proxies
        if request.url.path.startswith(self.NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store"
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        logger.info(f"[{request_id}] {request.method} {request.url.path} from {client_address(request)}")

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        logger.info(f"[{request_id}] {response.status_code} {request.url.path} in {elapsed:.3f}s")
        response.headers["X-Request-ID"] = request_id
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last line of defence: anything not mapped by an exception handler becomes a generic 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
            message = f"Internal server error: {e}" if settings.DEBUG else "Internal server error"
            return JSONResponse(status_code=500, content=create_error_response(message, 500))


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Hard cap on request bodies, well above the per-file limit.

    Files just over MAX_FILE_SIZE still reach the upload handler and get the
    specific size message; this only stops bodies that are plainly abusive.
    """

    def __init__(self, app: ASGIApp, max_bytes: int = None):
        super().__init__(app)
        self.max_bytes = max_bytes or settings.max_request_size

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            logger.warning(f"Rejected {declared} byte body on {request.url.path} from {client_address(request)}")
            return JSONResponse(
                status_code=413,
                content=create_error_response("Request entity too large", 413),
            )
        return await call_next(request)
