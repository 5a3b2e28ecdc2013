"""
Request Context Middleware

Resets the structlog context at the start of every request and logs one
line per completed request.
"""

import time

from fastapi import FastAPI, Request

from slyp.shared.core.logging import clear_log_context, logger


def setup_request_context(app: FastAPI) -> None:
    """Register the per-request logging middleware."""

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        clear_log_context()
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
