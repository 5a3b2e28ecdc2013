"""
Reslyp Repository

Database operations for share edges and the "friends" views derived from them.

Common Operations:
==================
- create_edge()           → Insert-if-absent on (sender_user_slyp_id, recipient_user_id)
- get_with_parties()      → One edge with sender and recipient loaded
- list_for_user_slyp()    → Every edge in a membership's chain
- friends_of()            → Users connected to a membership through its chain
- exchanged_with()        → Users connected to a user through any slyp

Chain of a UserSlyp:
====================
For a membership `us` (owner u, slyp s) the chain is:

    sent      : reslyps WHERE sender_user_slyp_id = us.id
    received  : reslyps WHERE recipient_user_id = u
                          AND sender membership is on slyp s

Both halves feed the duplicate-share check and the "shared with" list.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_, select, union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from slyp.shared.models.reslyp import Reslyp
from slyp.shared.models.user import User
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.base import BaseRepository


def _with_parties(stmt):
    return stmt.options(
        selectinload(Reslyp.sender_user_slyp).options(
            selectinload(UserSlyp.user),
            selectinload(UserSlyp.slyp),
        ),
        selectinload(Reslyp.recipient),
    )


class ReslypRepository(BaseRepository[Reslyp]):
    """Repository for Reslyp edges."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Reslyp, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # EDGES
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_edge(
        self,
        sender_user_slyp_id: UUID,
        recipient_user_id: UUID,
        comment: str,
    ) -> tuple[Reslyp, bool]:
        """
        Insert a share edge unless the same sender membership already reached this user.

        Returns:
            Tuple of (edge, False if an edge for the pair already existed)
        """
        return await self.insert_if_absent(
            ["sender_user_slyp_id", "recipient_user_id"],
            sender_user_slyp_id=sender_user_slyp_id,
            recipient_user_id=recipient_user_id,
            comment=comment,
        )

    async def get_with_parties(self, reslyp_id: UUID) -> Optional[Reslyp]:
        """Get one edge with sender membership, sender user and recipient loaded."""
        result = await self.session.execute(
            _with_parties(select(Reslyp).where(Reslyp.id == reslyp_id))
        )
        return result.scalar_one_or_none()

    async def get_many_with_parties(self, reslyp_ids: List[UUID]) -> List[Reslyp]:
        """Load several edges with parties, preserving the order of `reslyp_ids`."""
        if not reslyp_ids:
            return []
        result = await self.session.execute(
            _with_parties(select(Reslyp).where(Reslyp.id.in_(reslyp_ids)))
        )
        by_id = {reslyp.id: reslyp for reslyp in result.scalars().all()}
        return [by_id[reslyp_id] for reslyp_id in reslyp_ids if reslyp_id in by_id]

    async def list_for_user_slyp(self, user_slyp: UserSlyp) -> List[Reslyp]:
        """Every edge sent from `user_slyp` or received by its owner for the same slyp."""
        sender = aliased(UserSlyp)
        stmt = (
            select(Reslyp)
            .join(sender, Reslyp.sender_user_slyp_id == sender.id)
            .where(
                or_(
                    Reslyp.sender_user_slyp_id == user_slyp.id,
                    and_(
                        Reslyp.recipient_user_id == user_slyp.user_id,
                        sender.slyp_id == user_slyp.slyp_id,
                    ),
                )
            )
            .order_by(Reslyp.created_at.desc(), Reslyp.id)
        )
        result = await self.session.execute(_with_parties(stmt))
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # FRIENDS
    # ═══════════════════════════════════════════════════════════════════════════

    async def friends_of(self, user_slyp: UserSlyp) -> List[User]:
        """
        Distinct users connected to `user_slyp` through its chain, in email order.

        Recipients of edges sent from this membership, plus senders of edges
        this owner received for the same slyp.
        """
        sender = aliased(UserSlyp)
        recipients = select(Reslyp.recipient_user_id.label("user_id")).where(
            Reslyp.sender_user_slyp_id == user_slyp.id
        )
        senders = (
            select(sender.user_id.label("user_id"))
            .join(Reslyp, Reslyp.sender_user_slyp_id == sender.id)
            .where(
                Reslyp.recipient_user_id == user_slyp.user_id,
                sender.slyp_id == user_slyp.slyp_id,
            )
        )
        connected = union(recipients, senders).subquery()

        stmt = (
            select(User)
            .where(User.id.in_(select(connected.c.user_id)))
            .where(User.id != user_slyp.user_id)
            .order_by(User.email)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def exchanged_with(self, user_id: UUID) -> List[User]:
        """Distinct users that `user_id` has sent any slyp to or received any slyp from."""
        sender = aliased(UserSlyp)
        sent_to = (
            select(Reslyp.recipient_user_id.label("user_id"))
            .join(sender, Reslyp.sender_user_slyp_id == sender.id)
            .where(sender.user_id == user_id)
        )
        received_from = (
            select(sender.user_id.label("user_id"))
            .join(Reslyp, Reslyp.sender_user_slyp_id == sender.id)
            .where(Reslyp.recipient_user_id == user_id)
        )
        connected = union(sent_to, received_from).subquery()

        stmt = (
            select(User)
            .where(User.id.in_(select(connected.c.user_id)))
            .where(User.id != user_id)
            .order_by(User.email)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
