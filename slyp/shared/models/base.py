"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Slyp:
the declarative base and the timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Slyp never hard-deletes user data. A UserSlyp carries its own `deleted`
tombstone flag instead of a deleted_at column, so there is no soft-delete mixin.

Usage:
======
    from slyp.shared.models.base import Base, TimestampMixin, enum_values

    class Slyp(Base, TimestampMixin):
        __tablename__ = "slyps"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Type

from sqlalchemy import DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Primary keys use the generic `Uuid` type so the same models run on
    PostgreSQL (native UUID) and SQLite (CHAR(32)) in tests.
    """


def enum_values(enum_cls: Type[Enum]) -> list[str]:
    """Persist enum *values* ("article") rather than member names ("ARTICLE")."""
    return [member.value for member in enum_cls]


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Database Behavior:
    ==================
    - created_at: Set by the database on INSERT via server_default
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
