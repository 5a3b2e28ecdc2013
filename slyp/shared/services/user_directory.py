"""
User Directory

Resolves recipient emails to users, inviting the ones nobody registered yet,
and serves recipient autocomplete.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.core.logging import get_logger
from slyp.shared.models.user import User
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.reslyp_repository import ReslypRepository
from slyp.shared.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserDirectory:
    """Email → user resolution and recipient search."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.reslyp_repo = ReslypRepository(session)

    async def resolve_or_invite(self, email: str) -> User:
        """
        Return the user owning `email`, creating a pending (invited) account if needed.

        Args:
            email: Syntactically valid email address

        Returns:
            Existing or newly invited user
        """
        user, created = await self.user_repo.get_or_invite(email.strip())
        if created:
            logger.info("User invited", user_id=str(user.id), email=user.email)
        return user

    async def search(
        self,
        query: str,
        requester_id: UUID,
        user_slyp: Optional[UserSlyp] = None,
        limit: int = 10,
    ) -> List[User]:
        """
        Recipient candidates whose email or display name contains `query`.

        The requester is never suggested; when `user_slyp` is given, the
        users already in its sharing chain are left out too.
        """
        excluded = {requester_id}
        if user_slyp is not None:
            excluded.update(friend.id for friend in await self.reslyp_repo.friends_of(user_slyp))
        return await self.user_repo.search(query.strip(), exclude_ids=excluded, limit=limit)

    async def exchanged_with(self, user_id: UUID) -> List[User]:
        """Everyone `user_id` has sent a slyp to or received one from."""
        return await self.reslyp_repo.exchanged_with(user_id)
