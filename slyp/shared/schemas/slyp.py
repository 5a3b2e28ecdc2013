"""
Slyp Schemas

Request/response models for canonical content.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from slyp.shared.models.enums import SlypType
from slyp.shared.schemas.common import BaseSchema


class ImportUrlRequest(BaseModel):
    """Request carrying a page URL (POST /slyps and POST /user_slyps)."""

    url: str = Field(min_length=1, description="Absolute http(s) URL of the page")


class SlypResponse(BaseSchema):
    """Canonical content record."""

    id: UUID
    url: str
    normalized_url: str
    title: str
    author: Optional[str] = None
    site_name: Optional[str] = None
    slyp_type: SlypType
    duration_seconds: Optional[int] = None
    html: Optional[str] = None
    display_url: Optional[str] = None
    created_at: datetime
