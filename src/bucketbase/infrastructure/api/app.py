"""FastAPI application factory and configuration.

The admin API persists schemas, collection data and site metadata to the
configured object store. The store is chosen once when the application is
created and kept on ``app.state``.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bucketbase.core.config import Settings, get_settings
from bucketbase.core.exceptions import BucketBaseError
from bucketbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from bucketbase.infrastructure.storage.factory import create_object_store
from bucketbase.infrastructure.storage.object_store import ObjectStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    configure_logging(settings)
    logger.info(
        "Starting BucketBase API",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        object_store=settings.object_store,
        layout=settings.storage_layout,
    )

    yield

    logger.info("Shutting down BucketBase API")


def create_app(
    settings: Settings | None = None,
    object_store: ObjectStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        object_store: Store to persist to; built from settings when omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Admin API for object-storage backed sites, collections and records",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.object_store = object_store or create_object_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app, settings)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health_check():
        """Returns 200 while the service is running; the object store is not probed."""
        return {
            "status": "healthy",
            "service": "BucketBase",
            "version": app.state.settings.app_version,
        }


def register_routes(app: FastAPI, settings: Settings) -> None:
    from bucketbase.infrastructure.api.routes import (
        auth_router,
        collections_router,
        schema_router,
        sites_router,
    )

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(schema_router, prefix=f"{prefix}/schema", tags=["schema"])
    app.include_router(
        collections_router, prefix=f"{prefix}/collections", tags=["collections"]
    )
    app.include_router(sites_router, prefix=f"{prefix}/sites", tags=["sites"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        return {"name": settings.app_name, "version": settings.app_version}


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Storage core errors answer with their HTTP status and a
    ``{"message", "errorType"}`` body.
    """

    @app.exception_handler(BucketBaseError)
    async def bucketbase_exception_handler(request: Request, exc: BucketBaseError):
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            "Request failed",
            path=str(request.url.path),
            method=request.method,
            error_type=exc.code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.http_status,
            content={"message": exc.message, "errorType": exc.code},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "message": str(exc) if app.state.settings.debug else "An unexpected error occurred",
                "errorType": "INTERNAL_ERROR",
            },
        )


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info("Request started", method=request.method, path=str(request.url.path))
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
