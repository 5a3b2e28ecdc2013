"""
UserSlyp Entity Model

A user's membership of a canonical Slyp, with the flags that are local to
that user.

A membership is created when the user imports a URL directly or when
somebody reslyps the content to them. The owner is the only one who may
change its flags, and it is never hard-deleted: `deleted` is a tombstone.

SAMPLE USER_SLYP RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ slyp_id          │ 770e8400-e29b-41d4-a716-446655440000                      │
│ archived         │ false                                                      │
│ favourite        │ true                                                       │
│ deleted          │ false                                                      │
│ unseen           │ true   (arrived through a reslyp, not opened yet)          │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Boolean, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slyp.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from slyp.shared.models.user import User
    from slyp.shared.models.slyp import Slyp
    from slyp.shared.models.reslyp import Reslyp


class UserSlyp(Base, TimestampMixin):
    """
    UserSlyp model - one row per (user, slyp) pair.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        slyp_id: Canonical content
        archived / favourite / deleted: Owner-controlled flags
        unseen: True until the owner opens a slyp they received

    Relationships:
        user: Owner
        slyp: Canonical content
        sent_reslyps: Reslyps that originated from this membership
    """

    __tablename__ = "user_slyps"
    __table_args__ = (
        UniqueConstraint("user_id", "slyp_id", name="uq_user_slyps_user_id_slyp_id"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    slyp_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("slyps.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # USER FLAGS
    # ═══════════════════════════════════════════════════════════════════════════

    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    favourite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    unseen: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship(
        "User",
        back_populates="user_slyps",
    )

    slyp: Mapped["Slyp"] = relationship(
        "Slyp",
        back_populates="user_slyps",
    )

    sent_reslyps: Mapped[list["Reslyp"]] = relationship(
        "Reslyp",
        back_populates="sender_user_slyp",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<UserSlyp(id={self.id}, user_id={self.user_id}, slyp_id={self.slyp_id})>"
