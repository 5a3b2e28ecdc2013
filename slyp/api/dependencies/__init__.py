"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser
- Pagination: get_pagination()
- Services: get_*_service() functions (see services.py)

Usage:
======
    from slyp.api.dependencies import DbSession, CurrentUser

    @router.get("/user_slyps")
    async def index(db: DbSession, current_user: CurrentUser):
        ...
"""

from slyp.api.dependencies.database import (
    get_db,
    DbSession,
)
from slyp.api.dependencies.auth import (
    AuthenticatedUser,
    get_current_user,
    get_current_user_token,
    CurrentUser,
)
from slyp.api.dependencies.pagination import get_pagination

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "AuthenticatedUser",
    "get_current_user",
    "get_current_user_token",
    "CurrentUser",
    # Pagination
    "get_pagination",
]
