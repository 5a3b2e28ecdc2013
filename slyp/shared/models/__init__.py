"""
Slyp SQLAlchemy Models

This package contains all database models for the Slyp application.

Model Hierarchy:
================
    Slyp                         ← canonical content, one per normalized URL
       └── user_slyps (UserSlyp[])

    User
       ├── user_slyps (UserSlyp[])
       │      └── sent_reslyps (Reslyp[])
       └── received_reslyps (Reslyp[])

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Registered or invited user
- Slyp: Canonical extracted content
- UserSlyp: A user's membership of a slyp, with user-local flags
- Reslyp: Share edge from a sender membership to a recipient user

Usage:
======
    from slyp.shared.models import User, Slyp, UserSlyp, Reslyp
"""

from slyp.shared.models.base import Base, TimestampMixin
from slyp.shared.models.enums import (
    SlypType,
    UserStatus,
    UserSlypFlag,
    FailureReason,
)
from slyp.shared.models.user import User
from slyp.shared.models.slyp import Slyp
from slyp.shared.models.user_slyp import UserSlyp
from slyp.shared.models.reslyp import Reslyp

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "SlypType",
    "UserStatus",
    "UserSlypFlag",
    "FailureReason",
    # Core models
    "User",
    "Slyp",
    "UserSlyp",
    "Reslyp",
]
