"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ ExtractionAdapter (HTTP)

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- URLService: URL validation, normalization and hashing
- SlypService: Canonical content (ensure_canonical)
- UserSlypService: Memberships, flags, friends, imports
- UserDirectory: Email → user resolution, invitations, recipient search
- DistributionService: Reslyp fan-out
- AuthorizationGate: Ownership checks and authorized finders

Usage:
======
    from slyp.shared.services import DistributionService

    result = await DistributionService(db).fan_out(user_slyp.id, emails, comment)
"""

from slyp.shared.services.url_service import URLService
from slyp.shared.services.slyp_service import SlypService
from slyp.shared.services.user_slyp_service import (
    PaginatedUserSlyps,
    UserSlypDetail,
    UserSlypService,
)
from slyp.shared.services.user_directory import UserDirectory
from slyp.shared.services.distribution_service import (
    DistributionService,
    FanOutResult,
    ValidationFailure,
)
from slyp.shared.services.authorization import AuthorizationGate

__all__ = [
    "URLService",
    "SlypService",
    "UserSlypService",
    "UserSlypDetail",
    "PaginatedUserSlyps",
    "UserDirectory",
    "DistributionService",
    "FanOutResult",
    "ValidationFailure",
    "AuthorizationGate",
]
