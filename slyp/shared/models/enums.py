"""
Enums used across the application.
"""

from enum import Enum


class SlypType(str, Enum):
    """Kind of content the extraction service recognised."""

    ARTICLE = "article"
    VIDEO = "video"
    IMAGE = "image"
    OTHER = "other"

    @classmethod
    def from_extractor(cls, raw: str | None) -> "SlypType":
        """Map an extractor type string onto a SlypType; anything unknown is OTHER."""
        if not raw:
            return cls.OTHER
        try:
            return cls(raw.lower())
        except ValueError:
            return cls.OTHER


class UserStatus(str, Enum):
    """
    Account lifecycle.

    INVITED users were created by a reslyp to an email nobody had registered
    yet; registration (handled elsewhere) flips them to ACTIVE.
    """

    ACTIVE = "active"
    INVITED = "invited"


class UserSlypFlag(str, Enum):
    """User-local flags the owner may toggle on a UserSlyp."""

    ARCHIVED = "archived"
    FAVOURITE = "favourite"
    DELETED = "deleted"
    UNSEEN = "unseen"


class FailureReason(str, Enum):
    """Why a single fan-out target was rejected."""

    DUPLICATE = "duplicate"
    SELF = "self"
