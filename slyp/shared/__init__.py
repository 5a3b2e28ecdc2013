"""
Shared Module

Code behind the API, independent of HTTP:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Content-extraction client
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← JWT helpers

Usage:
======
    from slyp.shared.models import User, Slyp, UserSlyp, Reslyp
    from slyp.shared.repositories import UserSlypRepository
    from slyp.shared.services import DistributionService
    from slyp.shared.core import logger, SlypException
"""
