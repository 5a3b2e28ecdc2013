"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from slyp.shared.core.logging import logger, get_logger
    from slyp.shared.core.exceptions import SlypException, NotFoundError

    logger.info("Starting fan-out", recipients=len(emails))
"""

from slyp.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from slyp.shared.core.exceptions import (
    SlypException,
    ValidationError,
    AuthenticationError,
    NotFoundError,
    SlypNotFoundError,
    UserSlypNotFoundError,
    ReslypNotFoundError,
    UnprocessableError,
    FetchError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "SlypException",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "SlypNotFoundError",
    "UserSlypNotFoundError",
    "ReslypNotFoundError",
    "UnprocessableError",
    "FetchError",
]
