"""
Reslyp Entity Model

A directed share edge: "this membership was sent to that user, with this comment".

The edge references the sender's UserSlyp rather than the Slyp directly, so
provenance (which import was shared) survives metadata refreshes.

SAMPLE RESLYP RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                   │ 880e8400-e29b-41d4-a716-446655440000                  │
│ sender_user_slyp_id  │ 550e8400-e29b-41d4-a716-446655440000                  │
│ recipient_user_id    │ 990e8400-e29b-41d4-a716-446655440000                  │
│ comment              │ "You'll like this one"                                │
└──────────────────────────────────────────────────────────────────────────────┘

Uniqueness:
===========
(sender_user_slyp_id, recipient_user_id) is UNIQUE: a sender can reslyp the
same import to the same person only once.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slyp.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from slyp.shared.models.user import User
    from slyp.shared.models.user_slyp import UserSlyp


class Reslyp(Base, TimestampMixin):
    """
    Reslyp model - share edge from a sender membership to a recipient user.

    Attributes:
        id: Unique identifier (UUID v4)
        sender_user_slyp_id: Membership the share originated from
        recipient_user_id: User the share was addressed to
        comment: Free text sent along with the share

    Relationships:
        sender_user_slyp: Origin membership (its .user is the sender)
        recipient: Addressed user
    """

    __tablename__ = "reslyps"
    __table_args__ = (
        UniqueConstraint(
            "sender_user_slyp_id",
            "recipient_user_id",
            name="uq_reslyps_sender_user_slyp_id_recipient_user_id",
        ),
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

    sender_user_slyp_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_slyps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    recipient_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PAYLOAD
    # ═══════════════════════════════════════════════════════════════════════════

    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    sender_user_slyp: Mapped["UserSlyp"] = relationship(
        "UserSlyp",
        back_populates="sent_reslyps",
    )

    recipient: Mapped["User"] = relationship(
        "User",
        back_populates="received_reslyps",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Reslyp(id={self.id}, sender_user_slyp_id={self.sender_user_slyp_id}, "
            f"recipient_user_id={self.recipient_user_id})>"
        )
