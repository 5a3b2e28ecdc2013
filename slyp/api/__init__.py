"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← Database, bearer auth, pagination, services
    ├── handlers/         ← Route handlers
    └── middleware/       ← Exception handlers, request log context

Usage:
======
    # Run the API
    uvicorn slyp.api.main:app --reload

    # Import the app
    from slyp.api.main import app, create_application
"""
