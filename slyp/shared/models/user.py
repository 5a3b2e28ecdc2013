"""
User Entity Model

Represents an application user, registered or invited.

Model Hierarchy:
================
    User
       ├── user_slyps (UserSlyp[])          - The user's slyp memberships
       └── received_reslyps (Reslyp[])      - Shares addressed to the user

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "friend@example.com"                                      │
│ display_name     │ NULL                                                      │
│ status           │ invited                                                   │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

Passwords and sign-in live in the external auth service; this table only
holds what the sharing graph needs.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import String, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slyp.shared.models.base import Base, TimestampMixin, enum_values
from slyp.shared.models.enums import UserStatus


# TYPE_CHECKING block prevents circular imports while enabling type hints
if TYPE_CHECKING:
    from slyp.shared.models.user_slyp import UserSlyp
    from slyp.shared.models.reslyp import Reslyp


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4)
        email: Lower-cased email address (unique, indexed)
        display_name: Optional name shown next to avatars
        status: ACTIVE for registered accounts, INVITED for pending ones

    Relationships:
        user_slyps: All memberships owned by this user
        received_reslyps: All reslyps sent to this user
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    # Reslyps address users by email, so this is the directory key
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    display_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    status: Mapped[UserStatus] = mapped_column(
        SQLEnum(UserStatus, name="userstatus", values_callable=enum_values),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user_slyps: Mapped[list["UserSlyp"]] = relationship(
        "UserSlyp",
        back_populates="user",
    )

    received_reslyps: Mapped[list["Reslyp"]] = relationship(
        "Reslyp",
        back_populates="recipient",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def is_invited(self) -> bool:
        """True while the account is still a pending invitation."""
        return self.status == UserStatus.INVITED

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, status={self.status})>"
