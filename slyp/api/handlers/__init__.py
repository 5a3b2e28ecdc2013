"""
API Handlers

Route handlers for the Slyp API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from slyp.api.handlers import (
    health_handler,
    reslyp_handler,
    search_handler,
    slyp_handler,
    user_handler,
    user_slyp_handler,
)

__all__ = [
    "health_handler",
    "reslyp_handler",
    "search_handler",
    "slyp_handler",
    "user_handler",
    "user_slyp_handler",
]
