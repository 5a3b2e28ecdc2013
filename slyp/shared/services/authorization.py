"""
Authorization Gate

Who may read which membership or share edge.

    UserSlyp  → its owner only
    Reslyp    → the owner of the sending membership, or the recipient

Lookups on behalf of a user answer "not found" both when the record does
not exist and when it belongs to somebody else, so ids of other users'
items cannot be probed.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.core.exceptions import ReslypNotFoundError, UserSlypNotFoundError
from slyp.shared.models.reslyp import Reslyp
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.reslyp_repository import ReslypRepository
from slyp.shared.repositories.user_slyp_repository import UserSlypRepository


class AuthorizationGate:
    """Ownership checks and authorized finders."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_slyp_repo = UserSlypRepository(session)
        self.reslyp_repo = ReslypRepository(session)

    @staticmethod
    def can_view_user_slyp(user_id: UUID, user_slyp: UserSlyp) -> bool:
        return user_slyp.user_id == user_id

    @staticmethod
    def can_view_reslyp(user_id: UUID, reslyp: Reslyp) -> bool:
        """`reslyp.sender_user_slyp` must be loaded."""
        return reslyp.recipient_user_id == user_id or reslyp.sender_user_slyp.user_id == user_id

    async def authorized_find_user_slyp(self, user_id: UUID, user_slyp_id: UUID) -> UserSlyp:
        """
        Get one of the requester's memberships, slyp loaded.

        Raises:
            UserSlypNotFoundError: If absent or owned by someone else
        """
        user_slyp = await self.user_slyp_repo.get_with_slyp(user_slyp_id)
        if not user_slyp or not self.can_view_user_slyp(user_id, user_slyp):
            raise UserSlypNotFoundError(str(user_slyp_id))
        return user_slyp

    async def authorized_find_reslyp(self, user_id: UUID, reslyp_id: UUID) -> Reslyp:
        """
        Get a share edge the requester took part in, parties loaded.

        Raises:
            ReslypNotFoundError: If absent or the requester is neither sender nor recipient
        """
        reslyp = await self.reslyp_repo.get_with_parties(reslyp_id)
        if not reslyp or not self.can_view_reslyp(user_id, reslyp):
            raise ReslypNotFoundError(str(reslyp_id))
        return reslyp
