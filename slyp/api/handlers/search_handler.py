"""
Search Handler

Recipient autocomplete for the reslyp box.
"""

from fastapi import APIRouter, Depends

from slyp.api.dependencies import CurrentUser
from slyp.api.dependencies.services import get_authorization_gate, get_user_directory
from slyp.shared.schemas.user import UserSearchRequest, UserSummary
from slyp.shared.services.authorization import AuthorizationGate
from slyp.shared.services.user_directory import UserDirectory


router = APIRouter()


@router.post("/users", response_model=list[UserSummary])
async def search_users(
    request: UserSearchRequest,
    current_user: CurrentUser,
    gate: AuthorizationGate = Depends(get_authorization_gate),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Users whose email or display name contains `q`.

    With `user_slyp_id` (one of the requester's memberships), users already
    in that slyp's sharing chain are filtered out.
    """
    user_slyp = None
    if request.user_slyp_id is not None:
        user_slyp = await gate.authorized_find_user_slyp(current_user.user_id, request.user_slyp_id)

    users = await directory.search(
        request.q,
        requester_id=current_user.user_id,
        user_slyp=user_slyp,
        limit=request.limit,
    )
    return [UserSummary.model_validate(user) for user in users]
