"""
Reslyp Schemas

Request/response models for share edges.

A 422 from POST /reslyps keeps the standard error envelope and adds the
edges that were created before the failing recipient:

    {
        "error": {
            "code": "RESLYP_FAILED",
            "message": "b@x.com has already been sent this slyp",
            "details": {"email": "b@x.com", "reason": "duplicate"}
        },
        "reslyps": [ ...edges created before b@x.com... ]
    }
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from slyp.shared.models.reslyp import Reslyp
from slyp.shared.schemas.common import BaseSchema, ErrorDetail
from slyp.shared.schemas.user import UserSummary


class CreateReslypsRequest(BaseModel):
    """Share a slyp with several people at once."""

    emails: list[str] = Field(description="Recipient emails, processed in order")
    slyp_id: UUID = Field(description="Canonical slyp being shared")
    comment: str = Field(description="Comment stored on every edge")


class ReslypResponse(BaseSchema):
    """One share edge with sender and recipient identity."""

    id: UUID
    slyp_id: UUID
    sender_user_slyp_id: UUID
    comment: str
    created_at: datetime
    sender: UserSummary
    recipient: UserSummary

    @classmethod
    def from_model(cls, reslyp: Reslyp) -> "ReslypResponse":
        """Build from an edge loaded with its parties."""
        return cls(
            id=reslyp.id,
            slyp_id=reslyp.sender_user_slyp.slyp_id,
            sender_user_slyp_id=reslyp.sender_user_slyp_id,
            comment=reslyp.comment,
            created_at=reslyp.created_at,
            sender=UserSummary.model_validate(reslyp.sender_user_slyp.user),
            recipient=UserSummary.model_validate(reslyp.recipient),
        )


class FanOutErrorResponse(BaseModel):
    """422 body of a fan-out halted by a failing recipient."""

    error: ErrorDetail
    reslyps: list[ReslypResponse]
