"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    SlypException (base)
       │
       ├── ValidationError (400)        ← Missing or malformed request fields
       ├── AuthenticationError (401)    ← Missing/invalid bearer token
       ├── NotFoundError (404)          ← Record absent OR not owned by requester
       │      ├── SlypNotFoundError
       │      ├── UserSlypNotFoundError
       │      └── ReslypNotFoundError
       └── UnprocessableError (422)     ← Domain object failed validation
              └── FetchError            ← Extraction service could not describe a URL

NotFoundError is also what callers get for records owned by someone else:
the API never answers 403 for another user's slyp.

Usage:
======
    from slyp.shared.core.exceptions import NotFoundError, FetchError

    raise UserSlypNotFoundError(user_slyp_id)
    # {"error": {"code": "NOT_FOUND", "message": "UserSlyp with id '...' not found"}}

    raise FetchError(FetchError.TIMEOUT, url=url)
"""

from typing import Any, Optional


class SlypException(Exception):
    """
    Base exception for all Slyp application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST ERRORS (400, 401)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(SlypException):
    """
    Validation error (400 Bad Request).

    Raised when a request is missing fields or carries values of the wrong shape.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class AuthenticationError(SlypException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when the bearer token is missing, expired or malformed.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(SlypException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Slyp", slyp_id)
        # Message: "Slyp with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class SlypNotFoundError(NotFoundError):
    """Canonical slyp not found."""

    def __init__(self, slyp_id: str) -> None:
        super().__init__(resource="Slyp", resource_id=slyp_id)


class UserSlypNotFoundError(NotFoundError):
    """UserSlyp not found, or owned by another user."""

    def __init__(self, user_slyp_id: str) -> None:
        super().__init__(resource="UserSlyp", resource_id=user_slyp_id)


class ReslypNotFoundError(NotFoundError):
    """Reslyp not found, or requester is neither sender nor recipient."""

    def __init__(self, reslyp_id: str) -> None:
        super().__init__(resource="Reslyp", resource_id=reslyp_id)


# ═══════════════════════════════════════════════════════════════════════════════
# UNPROCESSABLE ERRORS (422)
# ═══════════════════════════════════════════════════════════════════════════════


class UnprocessableError(SlypException):
    """
    Unprocessable entity error (422).

    Raised when a well-formed request produces a domain object that fails
    validation: a duplicate share, no usable emails, an unfetchable URL.
    """

    def __init__(
        self,
        message: str = "Unprocessable entity",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "UNPROCESSABLE",
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_code=error_code,
            details=details,
        )


class FetchError(UnprocessableError):
    """
    The content-extraction service could not produce a descriptor.

    Attributes:
        reason: One of UNREACHABLE, UNSUPPORTED, TIMEOUT
    """

    UNREACHABLE = "unreachable"
    UNSUPPORTED = "unsupported"
    TIMEOUT = "timeout"

    def __init__(
        self,
        reason: str,
        url: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.reason = reason
        details: dict[str, Any] = {"reason": reason}
        if url:
            details["url"] = url
        super().__init__(
            message=message or f"Could not fetch content ({reason})",
            details=details,
            error_code="FETCH_FAILED",
        )
