import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.staticfiles import StaticFiles

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .database import create_db_and_tables
from .exceptions import (
    GalleryError,
    create_success_response,
    gallery_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .media_utils import CompressionOptions, ImageFormat
from .middleware import (
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RateLimitMiddleware,
    RequestSizeLimitMiddleware,
    SecurityMiddleware,
)
from .application.ports.storage_repo import ObjectStore
from .infrastructure.storage import LocalObjectStore, build_object_store
from .routers import admin_router, auth_router, public_router, uploads_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


def default_compression_options() -> CompressionOptions:
    return CompressionOptions(
        max_width=settings.IMAGE_MAX_WIDTH,
        max_height=settings.IMAGE_MAX_HEIGHT,
        quality=settings.IMAGE_QUALITY,
        format=ImageFormat(settings.IMAGE_FORMAT.lower()),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    if app.state.create_tables:
        create_db_and_tables()
        logger.info("Database initialized successfully")
    if isinstance(app.state.object_store, LocalObjectStore):
        os.makedirs(app.state.object_store.upload_dir, exist_ok=True)
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")


def create_app(
    object_store: Optional[ObjectStore] = None,
    compression_options: Optional[CompressionOptions] = None,
    create_tables: bool = True,
) -> FastAPI:
    """Build the application.

    The object store is constructed once here and lives for the whole
    process; tests pass a fake one in.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
    )
    app.state.object_store = object_store or build_object_store(settings)
    app.state.compression_options = compression_options or default_compression_options()
    app.state.create_tables = create_tables

    # Add custom exception handlers
    app.add_exception_handler(GalleryError, gallery_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    # Add middleware
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)
    app.include_router(uploads_router.router)
    app.include_router(public_router.router)
    app.include_router(admin_router.router)

    # Serve locally stored images the same way S3 would
    if isinstance(app.state.object_store, LocalObjectStore):
        app.mount(
            "/uploads",
            StaticFiles(directory=app.state.object_store.upload_dir, check_dir=False),
            name="uploads",
        )

    @app.get("/health")
    def health():
        return create_success_response({"status": "ok", "version": settings.APP_VERSION})

    return app


app = create_app()
