"""
Reslyp Handler

Share a slyp with other people and read share edges.

Endpoints:
==========
    POST /reslyps              → fan out to a list of emails (201 / 422)
    GET  /reslyps?id=<us_id>   → edges in one of my memberships' chains
    GET  /reslyps/{reslyp_id}  → one edge I sent or received

Handlers should ONLY parse requests, call services and format responses.
"""

from typing import Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from slyp.api.dependencies import CurrentUser
from slyp.api.dependencies.services import (
    get_authorization_gate,
    get_distribution_service,
    get_user_slyp_service,
)
from slyp.shared.core.exceptions import UnprocessableError, ValidationError
from slyp.shared.core.logging import get_logger
from slyp.shared.schemas.common import ErrorDetail
from slyp.shared.schemas.reslyp import (
    CreateReslypsRequest,
    FanOutErrorResponse,
    ReslypResponse,
)
from slyp.shared.services.authorization import AuthorizationGate
from slyp.shared.services.distribution_service import DistributionService
from slyp.shared.services.user_slyp_service import UserSlypService


router = APIRouter()
logger = get_logger(__name__)


def _valid_emails(emails: list[str]) -> list[str]:
    """Keep the syntactically valid entries, in order; malformed ones are dropped."""
    valid = []
    for email in emails:
        candidate = email.strip()
        try:
            validate_email(candidate, check_deliverability=False)
        except EmailNotValidError:
            logger.info("Dropping malformed recipient email", email=candidate)
            continue
        valid.append(candidate)
    return valid


@router.post(
    "",
    response_model=list[ReslypResponse],
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": FanOutErrorResponse}},
)
async def create_reslyps(
    request: CreateReslypsRequest,
    current_user: CurrentUser,
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
    distribution: DistributionService = Depends(get_distribution_service),
):
    """
    Share a slyp with each email, in order.

    The requester's own membership of the slyp is created if needed. The
    first recipient that cannot be shared with stops the batch; edges
    created before it are kept and returned alongside the 422.
    """
    slyp = await user_slyps.slyp_service.get(request.slyp_id)
    user_slyp, _ = await user_slyps.ensure_membership(current_user.user_id, slyp.id)

    emails = _valid_emails(request.emails)
    if not emails:
        raise UnprocessableError(
            "No valid recipient emails",
            details={"emails": request.emails},
        )

    result = await distribution.fan_out(user_slyp.id, emails, request.comment)
    reslyps = [ReslypResponse.from_model(reslyp) for reslyp in result.reslyps]

    if result.failure:
        body = FanOutErrorResponse(
            error=ErrorDetail(
                code="RESLYP_FAILED",
                message=result.failure.message,
                details={"email": result.failure.email, "reason": result.failure.reason.value},
            ),
            reslyps=reslyps,
        )
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder(body),
        )

    return reslyps


@router.get("", response_model=list[ReslypResponse])
async def list_reslyps(
    current_user: CurrentUser,
    id: Optional[UUID] = Query(None, description="UserSlyp whose sharing chain to list"),
    gate: AuthorizationGate = Depends(get_authorization_gate),
    user_slyps: UserSlypService = Depends(get_user_slyp_service),
):
    """All edges for one of the requester's memberships, newest first."""
    if id is None:
        raise ValidationError("Query parameter 'id' is required", details={"field": "id"})

    user_slyp = await gate.authorized_find_user_slyp(current_user.user_id, id)
    reslyps = await user_slyps.reslyps_for(user_slyp)
    return [ReslypResponse.from_model(reslyp) for reslyp in reslyps]


@router.get("/{reslyp_id}", response_model=ReslypResponse)
async def get_reslyp(
    reslyp_id: UUID,
    current_user: CurrentUser,
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """One edge the requester sent or received; 404 otherwise."""
    reslyp = await gate.authorized_find_reslyp(current_user.user_id, reslyp_id)
    return ReslypResponse.from_model(reslyp)
