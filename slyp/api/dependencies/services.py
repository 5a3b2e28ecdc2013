"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request around the request's session. The
extraction adapter is the one shared object; tests replace it by overriding
get_extraction_adapter.

Usage:
======
    from slyp.api.dependencies.services import get_distribution_service

    @router.post("")
    async def create(
        data: CreateReslypsRequest,
        distribution: DistributionService = Depends(get_distribution_service),
    ):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from slyp.api.dependencies.database import get_db
from slyp.shared.adapters.extraction_adapter import ExtractionAdapter
from slyp.shared.adapters.extraction_adapter import (
    get_extraction_adapter as _get_extraction_adapter,
)
from slyp.shared.services.authorization import AuthorizationGate
from slyp.shared.services.distribution_service import DistributionService
from slyp.shared.services.slyp_service import SlypService
from slyp.shared.services.user_directory import UserDirectory
from slyp.shared.services.user_slyp_service import UserSlypService


async def get_extraction_adapter() -> ExtractionAdapter:
    """Dependency to get the shared ExtractionAdapter."""
    return _get_extraction_adapter()


async def get_slyp_service(
    db: AsyncSession = Depends(get_db),
    extractor: ExtractionAdapter = Depends(get_extraction_adapter),
) -> SlypService:
    """Dependency to get SlypService instance."""
    return SlypService(db, extractor=extractor)


async def get_user_slyp_service(
    db: AsyncSession = Depends(get_db),
    slyp_service: SlypService = Depends(get_slyp_service),
) -> UserSlypService:
    """Dependency to get UserSlypService instance."""
    return UserSlypService(db, slyp_service=slyp_service)


async def get_user_directory(
    db: AsyncSession = Depends(get_db),
) -> UserDirectory:
    """Dependency to get UserDirectory instance."""
    return UserDirectory(db)


async def get_distribution_service(
    db: AsyncSession = Depends(get_db),
    user_slyp_service: UserSlypService = Depends(get_user_slyp_service),
    directory: UserDirectory = Depends(get_user_directory),
) -> DistributionService:
    """Dependency to get DistributionService instance."""
    return DistributionService(db, user_slyp_service=user_slyp_service, directory=directory)


async def get_authorization_gate(
    db: AsyncSession = Depends(get_db),
) -> AuthorizationGate:
    """Dependency to get AuthorizationGate instance."""
    return AuthorizationGate(db)
