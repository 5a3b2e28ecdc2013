"""
UserSlyp Handler

The requester's own slyps.

Endpoints:
==========
    POST  /user_slyps                  → import a URL (201)
    GET   /user_slyps                  → my memberships, paginated
    GET   /user_slyps/{user_slyp_id}   → one of mine (404 for anyone else's)
    PATCH /user_slyps/{user_slyp_id}   → toggle archived/favourite/deleted/unseen
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from slyp.api.dependencies import CurrentUser, get_pagination
from slyp.api.dependencies.services import get_authorization_gate, get_user_slyp_service
from slyp.shared.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from slyp.shared.schemas.slyp import ImportUrlRequest
from slyp.shared.schemas.user_slyp import UpdateUserSlypRequest, UserSlypResponse
from slyp.shared.services.authorization import AuthorizationGate
from slyp.shared.services.user_slyp_service import UserSlypService


router = APIRouter()


@router.post(
    "",
    response_model=UserSlypResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user_slyp(
    request: ImportUrlRequest,
    current_user: CurrentUser,
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
):
    """
    Import a page into the requester's list.

    A page already known to Slyp is not extracted again; importing the same
    page twice returns the existing membership.
    """
    user_slyp = await user_slyps.import_url(current_user.user_id, request.url)
    return UserSlypResponse.from_detail(await user_slyps.describe(user_slyp))


@router.get("", response_model=PaginatedResponse[UserSlypResponse])
async def list_user_slyps(
    current_user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination),
    include_archived: bool = Query(False, description="Include archived slyps"),
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
):
    """The requester's memberships, newest first. Deleted ones are never listed."""
    result = await user_slyps.list_for_user(
        current_user.user_id,
        page=pagination.page,
        page_size=pagination.per_page,
        include_archived=include_archived,
    )
    return PaginatedResponse[UserSlypResponse](
        data=[UserSlypResponse.from_detail(detail) for detail in result.items],
        pagination=PaginationMeta.create(
            page=result.page,
            per_page=result.page_size,
            total=result.total,
        ),
    )


@router.get("/{user_slyp_id}", response_model=UserSlypResponse)
async def get_user_slyp(
    user_slyp_id: UUID,
    current_user: CurrentUser,
    gate: AuthorizationGate = Depends(get_authorization_gate),
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
):
    """One of the requester's memberships."""
    user_slyp = await gate.authorized_find_user_slyp(current_user.user_id, user_slyp_id)
    return UserSlypResponse.from_detail(await user_slyps.describe(user_slyp))


@router.patch("/{user_slyp_id}", response_model=UserSlypResponse)
async def update_user_slyp(
    user_slyp_id: UUID,
    request: UpdateUserSlypRequest,
    current_user: CurrentUser,
    gate: AuthorizationGate = Depends(get_authorization_gate),
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
):
    """Change flags on one of the requester's memberships; omitted flags are untouched."""
    user_slyp = await gate.authorized_find_user_slyp(current_user.user_id, user_slyp_id)
    user_slyp = await user_slyps.update_flags(user_slyp, request.changes())
    return UserSlypResponse.from_detail(await user_slyps.describe(user_slyp))
