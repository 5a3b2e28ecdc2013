# pylint: skip-file
# ruff: noqa
"""Initial schema - users, slyps, user_slyps, reslyps

Revision ID: 001
Revises:
Create Date: 2026-01-05 00:00:00

Tables created:
- users: Directory of registered and invited users
- slyps: Canonical extracted content, unique per url_hash
- user_slyps: One membership per (user, slyp), with owner flags
- reslyps: Share edges, unique per (sender_user_slyp_id, recipient_user_id)

Enums created:
- userstatus: active, invited
- slyptype: article, video, image, other
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_status_enum = postgresql.ENUM(
    "active",
    "invited",
    name="userstatus",
    create_type=False,
)

slyp_type_enum = postgresql.ENUM(
    "article",
    "video",
    "image",
    "other",
    name="slyptype",
    create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE userstatus AS ENUM ('active', 'invited')")
    op.execute("CREATE TYPE slyptype AS ENUM ('article', 'video', 'image', 'other')")

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("status", user_status_enum, nullable=False, server_default="active"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "slyps",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("normalized_url", sa.Text(), nullable=False),
        sa.Column("url_hash", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=True),
        sa.Column("site_name", sa.Text(), nullable=True),
        sa.Column("slyp_type", slyp_type_enum, nullable=False, server_default="other"),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("html", sa.Text(), nullable=True),
        sa.Column("display_url", sa.Text(), nullable=True),
        *_timestamps(),
    )
    # Canonical key: ON CONFLICT (url_hash) arbitrates on this index
    op.create_index("ix_slyps_url_hash", "slyps", ["url_hash"], unique=True)

    op.create_table(
        "user_slyps",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "slyp_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("slyps.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("favourite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("unseen", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "slyp_id", name="uq_user_slyps_user_id_slyp_id"),
    )
    op.create_index("ix_user_slyps_user_id", "user_slyps", ["user_id"])
    op.create_index("ix_user_slyps_slyp_id", "user_slyps", ["slyp_id"])

    op.create_table(
        "reslyps",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "sender_user_slyp_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("user_slyps.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "recipient_user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("comment", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
        sa.UniqueConstraint(
            "sender_user_slyp_id",
            "recipient_user_id",
            name="uq_reslyps_sender_user_slyp_id_recipient_user_id",
        ),
    )
    op.create_index("ix_reslyps_sender_user_slyp_id", "reslyps", ["sender_user_slyp_id"])
    op.create_index("ix_reslyps_recipient_user_id", "reslyps", ["recipient_user_id"])


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("reslyps")
    op.drop_table("user_slyps")
    op.drop_table("slyps")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS slyptype")
    op.execute("DROP TYPE IF EXISTS userstatus")
