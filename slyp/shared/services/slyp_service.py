"""
Slyp Service

Canonical content records: one Slyp per distinct normalized URL.

Flow of ensure_canonical():
===========================
    url ──► URLService.validate_and_process() ──► url_hash
                                                    │
                  ┌── found by url_hash ◄───────────┤
                  │                                 │ not found
                  │                                 ▼
                  │                    ExtractionAdapter.extract(url)
                  │                                 │ (FetchError → 422, nothing stored)
                  │                                 ▼
                  │                    INSERT ... ON CONFLICT (url_hash) DO NOTHING
                  │                                 │
                  └────────────► Slyp ◄─────────────┘

A concurrent request that loses the insert race reads back the winner's row.

Usage:
======
    from slyp.shared.services.slyp_service import SlypService

    service = SlypService(db)
    slyp = await service.ensure_canonical("https://example.com/post")
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from slyp.shared.adapters.extraction_adapter import ExtractionAdapter, get_extraction_adapter
from slyp.shared.core.exceptions import SlypNotFoundError
from slyp.shared.core.logging import get_logger
from slyp.shared.models.slyp import Slyp
from slyp.shared.repositories.slyp_repository import SlypRepository
from slyp.shared.services.url_service import URLService

logger = get_logger(__name__)


class SlypService:
    """
    Service for canonical content.

    Handles:
    - URL validation and normalization
    - Extraction of first-seen URLs
    - Race-free creation keyed on url_hash
    """

    def __init__(
        self,
        session: AsyncSession,
        extractor: Optional[ExtractionAdapter] = None,
    ) -> None:
        """
        Initialize SlypService.

        Args:
            session: Async database session
            extractor: Extraction adapter (defaults to the shared singleton)
        """
        self.session = session
        self.slyp_repo = SlypRepository(session)
        self.extractor = extractor or get_extraction_adapter()

    async def ensure_canonical(self, url: str) -> Slyp:
        """
        Return the canonical Slyp for `url`, extracting and storing it on first sight.

        Args:
            url: Absolute http(s) URL

        Returns:
            The one Slyp whose normalized URL matches `url`

        Raises:
            UnprocessableError: If `url` is not an absolute http(s) URL
            FetchError: If the page could not be extracted
        """
        submitted, normalized, url_hash = URLService.validate_and_process(url)

        existing = await self.slyp_repo.get_by_url_hash(url_hash)
        if existing:
            return existing

        descriptor = await self.extractor.extract(submitted)

        slyp, created = await self.slyp_repo.insert_canonical(
            url_hash,
            url=submitted,
            normalized_url=normalized,
            title=descriptor.title,
            author=descriptor.author,
            site_name=descriptor.site_name,
            slyp_type=descriptor.slyp_type,
            duration_seconds=descriptor.duration_seconds,
            html=descriptor.html,
            display_url=descriptor.display_url,
        )
        if created:
            logger.info(
                "Slyp created",
                slyp_id=str(slyp.id),
                normalized_url=normalized,
                slyp_type=slyp.slyp_type.value,
            )
        return slyp

    async def get(self, slyp_id: UUID) -> Slyp:
        """
        Get a canonical slyp by id.

        Raises:
            SlypNotFoundError: If no such slyp exists
        """
        slyp = await self.slyp_repo.get(slyp_id)
        if not slyp:
            raise SlypNotFoundError(str(slyp_id))
        return slyp
