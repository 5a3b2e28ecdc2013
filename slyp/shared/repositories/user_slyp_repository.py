"""
UserSlyp repository for data access.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.functions import count as sql_count

from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.base import BaseRepository


class UserSlypRepository(BaseRepository[UserSlyp]):
    """Repository for UserSlyp memberships."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UserSlyp, session)

    async def get_with_slyp(self, user_slyp_id: UUID) -> Optional[UserSlyp]:
        """Get a membership with its canonical slyp eagerly loaded."""
        stmt = (
            select(UserSlyp)
            .where(UserSlyp.id == user_slyp_id)
            .options(selectinload(UserSlyp.slyp))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure(
        self, user_id: UUID, slyp_id: UUID, *, unseen: bool = False
    ) -> tuple[UserSlyp, bool]:
        """
        Atomic get-or-create of the (user, slyp) membership.

        New rows start with archived, favourite and deleted all False.
        `unseen` only applies when the row is created here.
        """
        return await self.insert_if_absent(
            ["user_id", "slyp_id"],
            user_id=user_id,
            slyp_id=slyp_id,
            archived=False,
            favourite=False,
            deleted=False,
            unseen=unseen,
        )

    def _owned_by(self, user_id: UUID, include_archived: bool, include_deleted: bool):
        stmt = select(UserSlyp).where(UserSlyp.user_id == user_id)
        if not include_archived:
            stmt = stmt.where(UserSlyp.archived.is_(False))
        if not include_deleted:
            stmt = stmt.where(UserSlyp.deleted.is_(False))
        return stmt

    async def list_for_user(
        self,
        user_id: UUID,
        offset: int = 0,
        limit: int = 20,
        include_archived: bool = False,
        include_deleted: bool = False,
    ) -> List[UserSlyp]:
        """Get a page of a user's memberships, newest first, slyp loaded."""
        stmt = (
            self._owned_by(user_id, include_archived, include_deleted)
            .options(selectinload(UserSlyp.slyp))
            .execution_options(populate_existing=True)
            .order_by(UserSlyp.created_at.desc(), UserSlyp.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_user(
        self,
        user_id: UUID,
        include_archived: bool = False,
        include_deleted: bool = False,
    ) -> int:
        """Count a user's memberships under the same filters as list_for_user()."""
        subquery = self._owned_by(user_id, include_archived, include_deleted).subquery()
        result = await self.session.execute(select(sql_count()).select_from(subquery))
        return result.scalar() or 0

    async def set_flag(self, user_slyp: UserSlyp, field: str, value: bool) -> UserSlyp:
        """Write one flag column and flush."""
        setattr(user_slyp, field, value)
        await self.session.flush()
        return user_slyp
