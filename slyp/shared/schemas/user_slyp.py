"""
UserSlyp Schemas

A membership is rendered flat: the canonical slyp's fields sit next to the
owner's flags, followed by the sharing chain.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from slyp.shared.models.enums import SlypType
from slyp.shared.schemas.common import BaseSchema
from slyp.shared.schemas.reslyp import ReslypResponse
from slyp.shared.schemas.user import UserSummary
from slyp.shared.services.user_slyp_service import UserSlypDetail


class UpdateUserSlypRequest(BaseModel):
    """Flags to change; omitted flags are left alone."""

    model_config = ConfigDict(extra="forbid")

    archived: Optional[bool] = None
    favourite: Optional[bool] = None
    deleted: Optional[bool] = None
    unseen: Optional[bool] = None

    def changes(self) -> dict[str, bool]:
        return self.model_dump(exclude_none=True)


class UserSlypResponse(BaseSchema):
    """Membership with its slyp and sharing chain."""

    id: UUID
    slyp_id: UUID
    url: str
    title: str
    author: Optional[str] = None
    site_name: Optional[str] = None
    slyp_type: SlypType
    duration_seconds: Optional[int] = None
    html: Optional[str] = None
    display_url: Optional[str] = None
    archived: bool
    favourite: bool
    deleted: bool
    unseen: bool
    created_at: datetime
    friends: list[UserSummary]
    reslyps: list[ReslypResponse]
    reslyps_count: int

    @classmethod
    def from_detail(cls, detail: UserSlypDetail) -> "UserSlypResponse":
        user_slyp = detail.user_slyp
        slyp = user_slyp.slyp
        return cls(
            id=user_slyp.id,
            slyp_id=slyp.id,
            url=slyp.url,
            title=slyp.title,
            author=slyp.author,
            site_name=slyp.site_name,
            slyp_type=slyp.slyp_type,
            duration_seconds=slyp.duration_seconds,
            html=slyp.html,
            display_url=slyp.display_url,
            archived=user_slyp.archived,
            favourite=user_slyp.favourite,
            deleted=user_slyp.deleted,
            unseen=user_slyp.unseen,
            created_at=user_slyp.created_at,
            friends=[UserSummary.model_validate(friend) for friend in detail.friends],
            reslyps=[ReslypResponse.from_model(reslyp) for reslyp in detail.reslyps],
            reslyps_count=detail.reslyps_count,
        )
