"""
UserSlyp Service

Per-user memberships of canonical slyps and the views built on them.

A membership is created in two ways:
- the owner imports a URL (import_url, unseen=False)
- someone reslyps the content to the owner (fan-out, unseen=True)

Either way there is at most one membership per (user, slyp); a second import
or a second share of the same content returns the existing row untouched.

Usage:
======
    from slyp.shared.services.user_slyp_service import UserSlypService

    service = UserSlypService(db)
    user_slyp = await service.import_url(user_id, "https://example.com/post")
    detail = await service.describe(user_slyp)
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.core.exceptions import UserSlypNotFoundError, ValidationError
from slyp.shared.core.logging import get_logger
from slyp.shared.models.enums import UserSlypFlag
from slyp.shared.models.reslyp import Reslyp
from slyp.shared.models.user import User
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.repositories.reslyp_repository import ReslypRepository
from slyp.shared.repositories.user_slyp_repository import UserSlypRepository
from slyp.shared.services.slyp_service import SlypService

logger = get_logger(__name__)

TOGGLEABLE_FIELDS = frozenset(flag.value for flag in UserSlypFlag)


@dataclass
class UserSlypDetail:
    """A membership together with its sharing chain."""

    user_slyp: UserSlyp
    friends: List[User]
    reslyps: List[Reslyp]

    @property
    def reslyps_count(self) -> int:
        return len(self.reslyps)


@dataclass
class PaginatedUserSlyps:
    """Paginated list of a user's memberships."""

    items: List[UserSlypDetail]
    total: int
    page: int
    page_size: int
    has_next: bool
    has_prev: bool


class UserSlypService:
    """
    Service for UserSlyp memberships.

    Handles:
    - Idempotent membership creation
    - Flag toggles (archived, favourite, deleted, unseen)
    - Friends and reslyps of a membership
    - Importing a URL straight into the requester's list
    """

    def __init__(
        self,
        session: AsyncSession,
        slyp_service: Optional[SlypService] = None,
    ) -> None:
        """
        Initialize UserSlypService.

        Args:
            session: Async database session
            slyp_service: Canonical content service (built from `session` if omitted)
        """
        self.session = session
        self.user_slyp_repo = UserSlypRepository(session)
        self.reslyp_repo = ReslypRepository(session)
        self.slyp_service = slyp_service or SlypService(session)

    async def ensure_membership(
        self,
        user_id: UUID,
        slyp_id: UUID,
        *,
        unseen: bool = False,
    ) -> tuple[UserSlyp, bool]:
        """
        Atomic get-or-create of the (user, slyp) membership.

        Args:
            user_id: Owner
            slyp_id: Canonical slyp
            unseen: Initial unseen flag, applied only when the row is created

        Returns:
            Tuple of (membership, True if created by this call)
        """
        user_slyp, created = await self.user_slyp_repo.ensure(user_id, slyp_id, unseen=unseen)
        if created:
            logger.info(
                "Membership created",
                user_slyp_id=str(user_slyp.id),
                user_id=str(user_id),
                slyp_id=str(slyp_id),
                unseen=unseen,
            )
        return user_slyp, created

    async def import_url(self, user_id: UUID, url: str) -> UserSlyp:
        """
        Add the page at `url` to the user's list.

        Raises:
            UnprocessableError: If `url` is invalid
            FetchError: If the page could not be extracted
        """
        slyp = await self.slyp_service.ensure_canonical(url)
        user_slyp, _ = await self.ensure_membership(user_id, slyp.id)
        return await self.get_loaded(user_slyp.id)

    async def get_loaded(self, user_slyp_id: UUID) -> UserSlyp:
        """Get a membership with its slyp loaded."""
        user_slyp = await self.user_slyp_repo.get_with_slyp(user_slyp_id)
        if not user_slyp:
            raise UserSlypNotFoundError(str(user_slyp_id))
        return user_slyp

    async def friends_of(self, user_slyp: UserSlyp) -> List[User]:
        """Distinct users this membership's chain connects its owner with."""
        return await self.reslyp_repo.friends_of(user_slyp)

    async def reslyps_for(self, user_slyp: UserSlyp) -> List[Reslyp]:
        """Edges in this membership's chain, newest first, with parties loaded."""
        return await self.reslyp_repo.list_for_user_slyp(user_slyp)

    async def describe(self, user_slyp: UserSlyp) -> UserSlypDetail:
        """Bundle a membership with its friends and reslyps for serialization."""
        return UserSlypDetail(
            user_slyp=user_slyp,
            friends=await self.friends_of(user_slyp),
            reslyps=await self.reslyps_for(user_slyp),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # FLAGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def toggle(self, user_slyp: UserSlyp, field: str, value: bool) -> UserSlyp:
        """
        Set exactly one flag on a membership.

        The caller must already have checked ownership (AuthorizationGate).

        Args:
            user_slyp: Membership to change
            field: One of archived, favourite, deleted, unseen
            value: New value

        Raises:
            ValidationError: If `field` is not a toggleable flag
        """
        if field not in TOGGLEABLE_FIELDS:
            raise ValidationError(
                f"'{field}' is not a toggleable field",
                details={"field": field, "allowed": sorted(TOGGLEABLE_FIELDS)},
            )
        if not isinstance(value, bool):
            raise ValidationError(f"'{field}' must be a boolean", details={"field": field})

        user_slyp = await self.user_slyp_repo.set_flag(user_slyp, field, value)
        logger.debug("Flag toggled", user_slyp_id=str(user_slyp.id), field=field, value=value)
        return user_slyp

    async def update_flags(self, user_slyp: UserSlyp, changes: dict[str, bool]) -> UserSlyp:
        """Apply several toggles; each one touches only its own column."""
        for field, value in changes.items():
            user_slyp = await self.toggle(user_slyp, field, value)
        return user_slyp

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_for_user(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = 20,
        include_archived: bool = False,
        include_deleted: bool = False,
    ) -> PaginatedUserSlyps:
        """
        Get a page of the user's memberships, newest first.

        Args:
            user_id: Owner
            page: Page number (1-indexed)
            page_size: Items per page
            include_archived: Whether archived memberships are listed
            include_deleted: Whether tombstoned memberships are listed
        """
        offset = (page - 1) * page_size
        rows = await self.user_slyp_repo.list_for_user(
            user_id,
            offset=offset,
            limit=page_size,
            include_archived=include_archived,
            include_deleted=include_deleted,
        )
        total = await self.user_slyp_repo.count_for_user(
            user_id,
            include_archived=include_archived,
            include_deleted=include_deleted,
        )

        items = [await self.describe(user_slyp) for user_slyp in rows]
        return PaginatedUserSlyps(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_next=offset + len(rows) < total,
            has_prev=page > 1,
        )
