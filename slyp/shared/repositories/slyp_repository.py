"""
Slyp Repository

Database operations specific to the canonical Slyp model.

Common Operations:
==================
- get_by_url_hash()   → Find content by URL hash (deduplication key)
- insert_canonical()  → Insert-if-absent keyed on url_hash
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.repositories.base import BaseRepository
from slyp.shared.models.slyp import Slyp


class SlypRepository(BaseRepository[Slyp]):
    """
    Repository for Slyp database operations.

    Handles content deduplication via URL hash lookups.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize SlypRepository.

        Args:
            session: Async database session
        """
        super().__init__(Slyp, session)

    async def get_by_url_hash(self, url_hash: str) -> Optional[Slyp]:
        """
        Get content by URL hash.

        Args:
            url_hash: SHA256 hash of normalized URL

        Returns:
            Slyp if found, None otherwise
        """
        result = await self.session.execute(select(Slyp).where(Slyp.url_hash == url_hash))
        return result.scalar_one_or_none()

    async def insert_canonical(self, url_hash: str, **fields: Any) -> tuple[Slyp, bool]:
        """
        Insert a canonical slyp unless another request already did.

        Args:
            url_hash: SHA256 hash of normalized URL
            **fields: Remaining Slyp columns

        Returns:
            Tuple of (canonical slyp, True if created by this call)
        """
        return await self.insert_if_absent(["url_hash"], url_hash=url_hash, **fields)
