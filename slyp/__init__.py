"""
Slyp Backend

Save web pages as slyps and reslyp them to friends by email.

Package Structure:
==================
    slyp/
    ├── api/        ← FastAPI application
    ├── client/     ← Share interaction state for UI clients
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn slyp.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
