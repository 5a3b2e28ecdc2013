"""
Authentication Dependencies

Bearer-token authentication. Tokens are issued by the external account
service; this API only verifies them.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_user()        ← Read the user_id claim, bind it to the log context

Usage:
======
    from slyp.api.dependencies.auth import CurrentUser

    @router.get("/users/friends")
    async def friends(current_user: CurrentUser):
        current_user.user_id  # UUID
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...config.settings import settings
from ...shared.core.exceptions import AuthenticationError
from ...shared.core.logging import log_context
from ...shared.utils.security import SecurityUtils


# auto_error=False so a missing header surfaces as our 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Claims of a verified access token."""

    user_id: UUID
    email: Optional[str] = None


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    request: Request,
    token: Annotated[dict, Depends(get_current_user_token)],
) -> AuthenticatedUser:
    """
    Get current authenticated user from token.

    Raises:
        AuthenticationError: If user_id is missing from the token or is not a UUID
    """
    raw_user_id = token.get("user_id")
    if not raw_user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        user_id = UUID(str(raw_user_id))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    log_context(user_id=str(user_id), path=request.url.path)
    return AuthenticatedUser(user_id=user_id, email=token.get("email"))


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
