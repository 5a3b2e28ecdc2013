"""
Slyp API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
    ┌──────────────────────────────────────────────────────────┐
    │ Middleware: CORS → request context → exception handlers  │
    └──────────────────────────────────────────────────────────┘
                               │
                               ▼
    ┌──────────────────────────────────────────────────────────┐
    │ Routers: health │ slyps │ user_slyps │ reslyps │ search  │
    │          users                                           │
    └──────────────────────────────────────────────────────────┘
                               │
                               ▼
    ┌──────────────────────────────────────────────────────────┐
    │ Dependencies: database │ bearer auth │ services          │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → database connection verified
2. Application serves requests
3. Application stops → extraction client and database pool closed

Usage:
======
    uvicorn slyp.api.main:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slyp.config.settings import settings
from slyp.shared.adapters.extraction_adapter import get_extraction_adapter
from slyp.shared.db import init_db, close_db
from slyp.shared.core.logging import logger
from slyp.api.middleware import setup_exception_handlers, setup_request_context
from slyp.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown of shared resources."""
    logger.info(
        "Starting Slyp API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )
    await init_db()
    logger.info("Slyp API started successfully")

    yield

    logger.info("Shutting down Slyp API")
    await get_extraction_adapter().close()
    await close_db()
    logger.info("Slyp API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Save web pages and share them with friends",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_request_context(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
