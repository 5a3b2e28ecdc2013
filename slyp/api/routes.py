"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints (no token)
    /slyps                  → Canonical content
    /user_slyps             → My slyps (import, list, show, toggle flags)
    /reslyps                → Share fan-out and share edges
    /search                 → Recipient autocomplete
    /users                  → People I share with

Usage:
======
    from slyp.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from slyp.api.handlers import (
    health_handler,
    reslyp_handler,
    search_handler,
    slyp_handler,
    user_handler,
    user_slyp_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        slyp_handler.router,
        prefix="/slyps",
        tags=["Slyps"],
    )

    app.include_router(
        user_slyp_handler.router,
        prefix="/user_slyps",
        tags=["UserSlyps"],
    )

    app.include_router(
        reslyp_handler.router,
        prefix="/reslyps",
        tags=["Reslyps"],
    )

    app.include_router(
        search_handler.router,
        prefix="/search",
        tags=["Search"],
    )

    app.include_router(
        user_handler.router,
        prefix="/users",
        tags=["Users"],
    )
