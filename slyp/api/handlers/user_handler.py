"""
User Handler

People the requester shares with.
"""

from fastapi import APIRouter, Depends

from slyp.api.dependencies import CurrentUser
from slyp.api.dependencies.services import get_user_directory
from slyp.shared.schemas.user import UserSummary
from slyp.shared.services.user_directory import UserDirectory


router = APIRouter()


@router.get("/friends", response_model=list[UserSummary])
async def list_friends(
    current_user: CurrentUser,
    directory: UserDirectory = Depends(get_user_directory),
):
    """Everyone the requester has sent a slyp to or received one from, by email."""
    users = await directory.exchanged_with(current_user.user_id)
    return [UserSummary.model_validate(user) for user in users]
