"""
Distribution Service

Fan-out of one share action ("reslyp") to an ordered list of recipient emails.

Policy: best effort, halting at the first failure, with a full report.
====================================================================
Recipients are processed strictly in input order. For each one:

    1. resolve_or_invite(email)                        → recipient User
    2. recipient is the sender          → failure(self),      stop
       recipient already in the chain   → failure(duplicate), stop
    3. ensure_membership(recipient, slyp, unseen=True)
    4. insert the Reslyp edge (ON CONFLICT DO NOTHING)
       conflict (a concurrent share won) → failure(duplicate), stop
    5. COMMIT                                           (edge is now durable)

Recipients after a failure are not processed. Edges committed before the
failure stay; there is no rollback across the batch. The FanOutResult tells
the caller exactly how far distribution got:

    FanOutResult(reslyps=[edge(a), edge(b)], failure=None)
    FanOutResult(reslyps=[edge(a)], failure=ValidationFailure("b@x.com", DUPLICATE, ...))

Usage:
======
    service = DistributionService(db)
    result = await service.fan_out(user_slyp.id, ["a@x.com", "b@x.com"], "hi")
    if result.failure:
        ...  # 422 with result.failure and result.reslyps
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.core.exceptions import UnprocessableError, UserSlypNotFoundError
from slyp.shared.core.logging import get_logger
from slyp.shared.models.enums import FailureReason
from slyp.shared.models.reslyp import Reslyp
from slyp.shared.models.user import User
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.reslyp_repository import ReslypRepository
from slyp.shared.repositories.user_slyp_repository import UserSlypRepository
from slyp.shared.services.user_directory import UserDirectory
from slyp.shared.services.user_slyp_service import UserSlypService

logger = get_logger(__name__)


@dataclass
class ValidationFailure:
    """The recipient that halted a fan-out, and why."""

    email: str
    reason: FailureReason
    message: str

    def to_dict(self) -> dict:
        return {"email": self.email, "reason": self.reason.value, "message": self.message}


@dataclass
class FanOutResult:
    """Edges created in input order, plus the failure that stopped the loop, if any."""

    reslyps: List[Reslyp] = field(default_factory=list)
    failure: Optional[ValidationFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


class DistributionService:
    """
    Service for reslyp fan-out.

    Handles:
    - Recipient resolution (inviting unknown emails)
    - Self and duplicate-share prevention against the sender's chain
    - Recipient memberships and share edges, committed per recipient
    """

    def __init__(
        self,
        session: AsyncSession,
        user_slyp_service: Optional[UserSlypService] = None,
        directory: Optional[UserDirectory] = None,
    ) -> None:
        """
        Initialize DistributionService.

        Args:
            session: Async database session (committed once per recipient)
            user_slyp_service: Membership service (built from `session` if omitted)
            directory: User directory (built from `session` if omitted)
        """
        self.session = session
        self.user_slyp_repo = UserSlypRepository(session)
        self.reslyp_repo = ReslypRepository(session)
        self.user_slyps = user_slyp_service or UserSlypService(session)
        self.directory = directory or UserDirectory(session)

    async def fan_out(
        self,
        sender_user_slyp_id: UUID,
        recipient_emails: Sequence[str],
        comment: str,
    ) -> FanOutResult:
        """
        Share the sender's slyp with each email, in order, until one fails.

        Args:
            sender_user_slyp_id: The sender's membership being shared
            recipient_emails: Syntactically valid emails, in the order to process
            comment: Comment stored on every edge

        Returns:
            FanOutResult with the created edges (parties loaded) and the halting failure

        Raises:
            UserSlypNotFoundError: If the sender membership does not exist
            UnprocessableError: If `recipient_emails` is empty
        """
        sender = await self.user_slyp_repo.get(sender_user_slyp_id)
        if not sender:
            raise UserSlypNotFoundError(str(sender_user_slyp_id))
        if not recipient_emails:
            raise UnprocessableError(
                "At least one valid recipient email is required",
                details={"emails": []},
            )

        friend_ids = {friend.id for friend in await self.user_slyps.friends_of(sender)}
        created_ids: List[UUID] = []
        failure: Optional[ValidationFailure] = None

        for email in recipient_emails:
            recipient = await self.directory.resolve_or_invite(email)

            failure = self._check_target(sender, recipient, email, friend_ids)
            if failure:
                break

            await self.user_slyps.ensure_membership(recipient.id, sender.slyp_id, unseen=True)
            reslyp, created = await self.reslyp_repo.create_edge(sender.id, recipient.id, comment)
            if not created:
                failure = self._duplicate(email)
                break

            await self.session.commit()
            friend_ids.add(recipient.id)
            created_ids.append(reslyp.id)
            logger.info(
                "Reslyp created",
                reslyp_id=str(reslyp.id),
                sender_user_slyp_id=str(sender.id),
                recipient_user_id=str(recipient.id),
            )

        if failure:
            # Invitations made while resolving the failing recipient are kept
            await self.session.commit()
            logger.info(
                "Fan-out halted",
                sender_user_slyp_id=str(sender.id),
                email=failure.email,
                reason=failure.reason.value,
                delivered=len(created_ids),
                skipped=len(recipient_emails) - len(created_ids) - 1,
            )

        reslyps = await self.reslyp_repo.get_many_with_parties(created_ids)
        return FanOutResult(reslyps=reslyps, failure=failure)

    def _check_target(
        self,
        sender: UserSlyp,
        recipient: User,
        email: str,
        friend_ids: set[UUID],
    ) -> Optional[ValidationFailure]:
        if recipient.id == sender.user_id:
            return ValidationFailure(
                email=email,
                reason=FailureReason.SELF,
                message="You cannot reslyp to yourself",
            )
        if recipient.id in friend_ids:
            return self._duplicate(email)
        return None

    @staticmethod
    def _duplicate(email: str) -> ValidationFailure:
        return ValidationFailure(
            email=email,
            reason=FailureReason.DUPLICATE,
            message=f"{email} has already been sent this slyp",
        )
