"""
Utilities Package

Contents:
=========
- security: JWT verification

Usage:
======
    from slyp.shared.utils.security import SecurityUtils
"""

from slyp.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
