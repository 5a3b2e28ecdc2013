"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]         ← Generic CRUD + insert_if_absent
         │
         ├── UserRepository           ← Directory lookups, invitations, search
         ├── SlypRepository           ← Canonical content by URL hash
         ├── UserSlypRepository       ← Memberships and their flags
         └── ReslypRepository         ← Share edges and friends views

Usage Example:
==============
    from slyp.shared.repositories import SlypRepository

    repo = SlypRepository(db)
    slyp, created = await repo.insert_canonical(url_hash, url=url, title=title, ...)
"""

from slyp.shared.repositories.base import BaseRepository
from slyp.shared.repositories.user_repository import UserRepository
from slyp.shared.repositories.slyp_repository import SlypRepository
from slyp.shared.repositories.user_slyp_repository import UserSlypRepository
from slyp.shared.repositories.reslyp_repository import ReslypRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "SlypRepository",
    "UserSlypRepository",
    "ReslypRepository",
]
