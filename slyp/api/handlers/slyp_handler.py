"""
Slyp Handler

Canonical content without a membership.
"""

from fastapi import APIRouter, Depends, status

from slyp.api.dependencies import CurrentUser
from slyp.api.dependencies.services import get_slyp_service
from slyp.shared.schemas.slyp import ImportUrlRequest, SlypResponse
from slyp.shared.services.slyp_service import SlypService


router = APIRouter()


@router.post(
    "",
    response_model=SlypResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_slyp(
    request: ImportUrlRequest,
    current_user: CurrentUser,
    slyp_service: SlypService = Depends(get_slyp_service),
):
    """Return the canonical slyp for a URL, extracting it on first sight."""
    slyp = await slyp_service.ensure_canonical(request.url)
    return SlypResponse.model_validate(slyp)
