"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)             → Fetch single record by UUID
- create()            → Create new record
- insert_if_absent()  → Atomic "INSERT ... ON CONFLICT DO NOTHING" + fetch

There is no delete: slyps, memberships and reslyps are never hard-deleted.

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        pass

    repo = UserRepository(db)
    user = await repo.get(id)  # Returns User, not Any!

Uniqueness Without Races:
=========================
Find-or-create written as "SELECT, then INSERT if nothing came back" lets two
concurrent requests both miss and both insert. insert_if_absent() instead
sends a single INSERT that the database skips when the unique key already
exists, then reads back whichever row won:

    ┌─────────────────────────────────────────────────────────────┐
    │ INSERT INTO slyps (...) VALUES (...)                        │
    │     ON CONFLICT (url_hash) DO NOTHING                       │
    │ SELECT * FROM slyps WHERE url_hash = :url_hash              │
    └─────────────────────────────────────────────────────────────┘

PostgreSQL (production) and SQLite (tests) both support the clause.

flush() vs commit():
====================
Repository methods flush; the request-scoped session commits in get_db().
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Slyp, UserSlyp)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session, flushes to get DB-generated values
        and refreshes it.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def insert_if_absent(
        self,
        conflict_columns: Sequence[str],
        **values: Any,
    ) -> tuple[ModelType, bool]:
        """
        Insert a row unless one with the same unique key already exists.

        Args:
            conflict_columns: Columns of the unique constraint to arbitrate on
            **values: Field values for the new record (must include the key columns)

        Returns:
            Tuple of (row holding the key, True if this call inserted it)

        Example:
            slyp, created = await repo.insert_if_absent(
                ["url_hash"], url_hash=url_hash, url=url, title=title
            )
        """
        insert = self._dialect_insert()

        # Pending ORM objects must reach the database before the raw INSERT
        await self.session.flush()

        stmt = insert(self.model).values(**values).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
        result = await self.session.execute(stmt)
        created = bool(result.rowcount)

        key_filter = [getattr(self.model, column) == values[column] for column in conflict_columns]
        instance = (
            await self.session.execute(
                select(self.model).where(*key_filter).execution_options(populate_existing=True)
            )
        ).scalar_one()
        return instance, created

    def _dialect_insert(self):
        """Pick the dialect-specific insert() construct that supports ON CONFLICT."""
        dialect_name = self.session.bind.dialect.name
        try:
            return _UPSERT_INSERTS[dialect_name]
        except KeyError:
            raise NotImplementedError(
                f"insert_if_absent is not supported on dialect '{dialect_name}'"
            ) from None
