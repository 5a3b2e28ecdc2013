"""
Slyp API client.

Thin async wrapper over the HTTP API used by the client-side controllers.
Every non-2xx answer is raised as ApiError carrying the server's error
envelope, so callers have one exception type to roll back on.

Usage:
======
    async with SlypApiClient(token=token) as api:
        reslyps = await api.reslyp(slyp_id, ["a@x.com"], "worth a read")
        user_slyp = await api.update_user_slyp(user_slyp_id, archived=True)
"""

from typing import Any, Optional

import httpx

from slyp.config.settings import settings
from slyp.shared.core.exceptions import SlypException
from slyp.shared.core.logging import get_logger

logger = get_logger(__name__)


class ApiError(SlypException):
    """
    The API answered with an error, or could not be reached.

    Attributes:
        body: Decoded JSON body, if any (a halted fan-out carries "reslyps")
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code or "API_ERROR",
            details=details,
        )
        self.body = body or {}


class SlypApiClient:
    """Async client for the Slyp HTTP API."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Bearer token of the signed-in user
            base_url: API root. If not provided, uses settings.SLYP_API_URL.
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport or ASGITransport)
        """
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.SLYP_API_URL,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SlypApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ═══════════════════════════════════════════════════════════════════════════
    # ENDPOINTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def reslyp(self, slyp_id: str, emails: list[str], comment: str) -> list[dict]:
        """POST /reslyps. A halted fan-out raises ApiError(422) whose body lists the edges made."""
        return await self._request(
            "POST",
            "/reslyps",
            json={"emails": emails, "slyp_id": str(slyp_id), "comment": comment},
        )

    async def get_user_slyp(self, user_slyp_id: str) -> dict:
        return await self._request("GET", f"/user_slyps/{user_slyp_id}")

    async def update_user_slyp(self, user_slyp_id: str, **flags: bool) -> dict:
        return await self._request("PATCH", f"/user_slyps/{user_slyp_id}", json=flags)

    async def search_users(self, q: str, user_slyp_id: Optional[str] = None) -> list[dict]:
        payload: dict[str, Any] = {"q": q}
        if user_slyp_id is not None:
            payload["user_slyp_id"] = str(user_slyp_id)
        return await self._request("POST", "/search/users", json=payload)

    # ═══════════════════════════════════════════════════════════════════════════
    # TRANSPORT
    # ═══════════════════════════════════════════════════════════════════════════

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Slyp API unreachable", method=method, path=path, error=str(e))
            raise ApiError(
                "Could not reach Slyp, please try again",
                status_code=503,
                error_code="UNREACHABLE",
            ) from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.warning(
                    "Slyp API sent an unreadable body",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                )
                raise ApiError(
                    "Slyp sent an unexpected response, please try again",
                    status_code=response.status_code,
                    error_code="INVALID_RESPONSE",
                ) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        error = body.get("error", {}) if isinstance(body, dict) else {}
        raise ApiError(
            error.get("message") or f"Request failed ({response.status_code})",
            status_code=response.status_code,
            error_code=error.get("code"),
            details=error.get("details"),
            body=body if isinstance(body, dict) else {},
        )
