"""
Slyp Entity Model

Canonical extracted content, shared by every user who holds the same URL.
A page is extracted once; every later import or reslyp points at the same row.

SAMPLE SLYP RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ url              │ "https://www.farnamstreetblog.com/2014/02/quotable/"      │
│ normalized_url   │ "https://farnamstreetblog.com/2014/02/quotable"           │
│ url_hash         │ "a1b2c3d4..."                                              │
│ title            │ "26 Musings from Kierkegaard"                              │
│ site_name        │ "Farnam Street"                                            │
│ slyp_type        │ article                                                    │
│ duration_seconds │ NULL                                                       │
└──────────────────────────────────────────────────────────────────────────────┘

Uniqueness:
===========
url_hash (SHA-256 of normalized_url) carries a UNIQUE constraint. Creation
goes through SlypRepository.insert_if_absent(), so two concurrent imports of
the same page cannot produce two canonical rows.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Integer, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slyp.shared.models.base import Base, TimestampMixin, enum_values
from slyp.shared.models.enums import SlypType


if TYPE_CHECKING:
    from slyp.shared.models.user_slyp import UserSlyp


class Slyp(Base, TimestampMixin):
    """
    Slyp model - canonical content record keyed by normalized URL.

    Attributes:
        id: Unique identifier (UUID v4)
        url: URL as first submitted
        normalized_url: Deduplication form of the URL
        url_hash: SHA256 of normalized_url (unique)
        title, author, site_name: Extracted metadata
        slyp_type: article, video, image or other
        duration_seconds: Play time for videos, if known
        html: Embeddable HTML, if the extractor returned any
        display_url: Lead image, if any

    Relationships:
        user_slyps: Every membership referencing this content
    """

    __tablename__ = "slyps"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # SOURCE
    # ═══════════════════════════════════════════════════════════════════════════

    url: Mapped[str] = mapped_column(Text, nullable=False)

    normalized_url: Mapped[str] = mapped_column(Text, nullable=False)

    url_hash: Mapped[str] = mapped_column(
        Text,
        unique=True,
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXTRACTED METADATA
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    site_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    slyp_type: Mapped[SlypType] = mapped_column(
        SQLEnum(SlypType, name="slyptype", values_callable=enum_values),
        nullable=False,
        default=SlypType.OTHER,
    )

    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    html: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    display_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # No delete cascade: a slyp outlives every membership pointing at it
    user_slyps: Mapped[list["UserSlyp"]] = relationship(
        "UserSlyp",
        back_populates="slyp",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Slyp(id={self.id}, type={self.slyp_type}, url={self.normalized_url})>"
