"""
User Schemas

Identity shown next to slyps and reslyps, and recipient search.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from slyp.shared.models.enums import UserStatus
from slyp.shared.schemas.common import BaseSchema


class UserSummary(BaseSchema):
    """Public identity of a user."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    status: UserStatus


class UserSearchRequest(BaseModel):
    """Recipient autocomplete query."""

    q: str = Field(min_length=1, description="Fragment of an email or display name")
    user_slyp_id: Optional[UUID] = Field(
        default=None,
        description="Leave out users already in this membership's sharing chain",
    )
    limit: int = Field(default=10, ge=1, le=50)
