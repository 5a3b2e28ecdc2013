"""
Adapters Package

External service integrations.

Contents:
=========
- extraction_adapter: Content-extraction service client (URL → metadata)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from slyp.shared.adapters.extraction_adapter import get_extraction_adapter

    descriptor = await get_extraction_adapter().extract(url)
"""
