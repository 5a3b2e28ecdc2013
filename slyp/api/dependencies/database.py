"""
Database Dependency

FastAPI dependency for database sessions. The session is committed on
success and rolled back on error (see slyp.shared.db.session).

Tests override `get_db` through `app.dependency_overrides` to point the
whole API at an in-memory database.

Usage:
======
    from slyp.api.dependencies.database import DbSession

    @router.get("/user_slyps")
    async def index(db: DbSession):
        ...
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's database session."""
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
