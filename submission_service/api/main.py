"""
FastAPI application for the Submission service.

This module initializes and configures the FastAPI application that serves
the submissions API endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from submission_service.config.settings import Settings, settings as default_settings
from submission_service.api.endpoints import submissions
from submission_service.core.exceptions import StorageError
from submission_service.core.request_handler import SubmissionRequestHandler
from submission_service.core.submission_store import SQLAlchemySubmissionStore, StoreConfig
from submission_service.utils.db_health import check_db_connection
from submission_service.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[SQLAlchemySubmissionStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use instead of the process-wide ones.
        store: A pre-built submission store. If None, one is created from
               the settings at startup and disposed of at shutdown.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    cfg = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager for startup and shutdown events.

        Builds the submission store and request handler on startup, makes
        sure the table exists, and disposes of the engine on shutdown.
        """
        setup_logging(cfg.LOGGING_CONFIG_PATH)
        logger.info(f"Starting {cfg.APP_NAME} v{cfg.APP_VERSION}")

        owns_store = store is None
        app_store = store if store is not None else SQLAlchemySubmissionStore(StoreConfig.from_settings(cfg))
        app.state.submission_store = app_store
        app.state.request_handler = SubmissionRequestHandler(
            app_store,
            ensure_schema_per_request=cfg.ENSURE_SCHEMA_ON_REQUEST,
        )

        if cfg.ENSURE_SCHEMA_ON_STARTUP:
            try:
                await app_store.ensure_schema()
                logger.info(f"Submissions table '{app_store.table.fullname}' is ready")
            except StorageError as e:
                # Requests will retry ensure_schema; do not block startup on the database
                logger.error(f"Could not ensure submissions table at startup: {e}")

        yield

        # Shutdown
        logger.info("Shutting down application")
        if owns_store:
            await app_store.close()

    app = FastAPI(
        title=cfg.APP_NAME,
        version=cfg.APP_VERSION,
        description="""Submission API for validating and storing title/description/author records.

        Every submission is checked field by field, in a fixed order, and the
        first failure is reported with its reason code and context.""",
        debug=cfg.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if cfg.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if cfg.DEBUG else None,
        openapi_tags=[
            {
                "name": "submissions",
                "description": "Submission operations"
            },
            {
                "name": "health",
                "description": "Health check and monitoring"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS if not cfg.DEBUG else ["*"],
        allow_credentials=cfg.CORS_ALLOW_CREDENTIALS,
        allow_methods=cfg.CORS_ALLOW_METHODS,
        allow_headers=cfg.CORS_ALLOW_HEADERS,
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=cfg.ALLOWED_HOSTS if not cfg.DEBUG else ["*"]
    )

    app.include_router(
        submissions.router,
        prefix="/api/submissions",
        tags=["submissions"]
    )

    @app.get("/health", tags=["health"], summary="Health Check", description="Get application health status")
    async def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            dict: Service status, version, timestamp and database reachability.
        """
        app_store = getattr(request.app.state, "submission_store", None)
        database_ok = await check_db_connection(app_store.engine) if app_store is not None else False
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": cfg.APP_NAME,
            "version": cfg.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if database_ok else "unavailable",
            "debug_mode": cfg.DEBUG,
        }

    return app


def run() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "submission_service.api.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
    )


# Create the application instance
app = create_app()
