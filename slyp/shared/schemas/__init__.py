"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, error responses
- user: User identity and recipient search
- slyp: Canonical content
- user_slyp: Memberships with their sharing chain
- reslyp: Share edges and fan-out failures

Usage:
======
    from slyp.shared.schemas.reslyp import CreateReslypsRequest, ReslypResponse
    from slyp.shared.schemas.common import PaginatedResponse, ErrorResponse
"""

from slyp.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from slyp.shared.schemas.user import UserSummary, UserSearchRequest
from slyp.shared.schemas.slyp import ImportUrlRequest, SlypResponse
from slyp.shared.schemas.reslyp import (
    CreateReslypsRequest,
    ReslypResponse,
    FanOutErrorResponse,
)
from slyp.shared.schemas.user_slyp import UpdateUserSlypRequest, UserSlypResponse

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserSummary",
    "UserSearchRequest",
    # Slyp
    "ImportUrlRequest",
    "SlypResponse",
    # Reslyp
    "CreateReslypsRequest",
    "ReslypResponse",
    "FanOutErrorResponse",
    # UserSlyp
    "UpdateUserSlypRequest",
    "UserSlypResponse",
]
