"""
Database Module

Database connectivity and session management for Slyp.

Architecture Overview:
======================
    FastAPI handler
        │  Depends(get_db)
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │
        ▼
    Services → Repositories (UserRepository, SlypRepository,
                             UserSlypRepository, ReslypRepository)
        │
        ▼
    PostgreSQL (SQLite in tests)

Usage in FastAPI:
=================
    from fastapi import Depends
    from slyp.shared.db import get_db

    @router.get("/user_slyps/{user_slyp_id}")
    async def show(user_slyp_id: UUID, db: AsyncSession = Depends(get_db)):
        ...
"""

from slyp.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
