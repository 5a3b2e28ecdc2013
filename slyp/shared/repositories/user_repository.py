"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_or_invite()     → Atomic find-or-create of an invited user
- search()            → Autocomplete candidates for the reslyp recipient box
"""

from typing import Iterable
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.repositories.base import BaseRepository
from slyp.shared.models.user import User
from slyp.shared.models.enums import UserStatus


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.

    Emails are stored lower-cased; every lookup lower-cases its argument too.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize UserRepository.

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def search(
        self,
        query: str,
        *,
        exclude_ids: Iterable[UUID] = (),
        limit: int = 10,
    ) -> list[User]:
        """
        Find users whose email or display name contains `query`.

        Args:
            query: Fragment typed into the recipient box
            exclude_ids: Users that must not be suggested
            limit: Maximum number of candidates

        Returns:
            Matching users ordered by email
        """
        pattern = f"%{query.lower()}%"
        stmt = select(User).where(
            or_(
                User.email.like(pattern),
                func.lower(User.display_name).like(pattern),
            )
        )
        excluded = list(exclude_ids)
        if excluded:
            stmt = stmt.where(User.id.not_in(excluded))
        stmt = stmt.order_by(User.email).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_or_invite(self, email: str) -> tuple[User, bool]:
        """
        Return the user owning `email`, creating an INVITED one if none exists.

        Args:
            email: Recipient email address

        Returns:
            Tuple of (user, True if the invitation was created by this call)
        """
        return await self.insert_if_absent(
            ["email"],
            email=email.lower(),
            status=UserStatus.INVITED,
        )
