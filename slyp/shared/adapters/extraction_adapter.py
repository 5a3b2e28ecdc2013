"""
Extraction adapter - content-extraction service client.

Provides:
- extract(url) → ContentDescriptor for a web page

The extraction service is a Diffbot-style "analyze" endpoint:

    GET {EXTRACTOR_API_URL}?token=...&url=...

    {
      "objects": [
        {"type": "article", "title": "...", "author": "...", "siteName": "...",
         "html": "...", "duration": 312, "images": [{"url": "...", "primary": true}]}
      ]
    }

Failure mapping:
================
    httpx.TimeoutException          → FetchError(timeout)
    httpx.TransportError / 5xx      → FetchError(unreachable)
    other non-2xx / "error" payload → FetchError(unsupported)
    no objects / no title           → FetchError(unsupported)
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ...config.settings import settings
from ..core.exceptions import FetchError
from ..core.logging import get_logger
from ..models.enums import SlypType

logger = get_logger(__name__)


@dataclass
class ContentDescriptor:
    """Normalized metadata for one page."""

    title: str
    author: Optional[str]
    site_name: Optional[str]
    slyp_type: SlypType
    duration_seconds: Optional[int] = None
    html: Optional[str] = None
    display_url: Optional[str] = None


class ExtractionAdapter:
    """
    Adapter for the content-extraction service.

    Handles:
    - The outbound HTTP call, bounded by EXTRACTOR_TIMEOUT_SECONDS
    - Mapping the payload onto a ContentDescriptor
    - Mapping every failure onto FetchError
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize extraction adapter.

        Args:
            api_url: Analyze endpoint. If not provided, uses settings.
            api_token: Service token. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.api_url = api_url or settings.EXTRACTOR_API_URL
        self.api_token = api_token if api_token is not None else settings.EXTRACTOR_API_TOKEN
        self.timeout = timeout if timeout is not None else settings.EXTRACTOR_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-loaded httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def extract(self, url: str) -> ContentDescriptor:
        """
        Describe the page at `url`.

        Args:
            url: Absolute http(s) URL

        Returns:
            ContentDescriptor

        Raises:
            FetchError: If the service cannot produce a descriptor
        """
        params = {"token": self.api_token, "url": url}
        try:
            response = await self.client.get(self.api_url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Extraction timed out", url=url, error=str(e))
            raise FetchError(FetchError.TIMEOUT, url=url) from e
        except httpx.TransportError as e:
            logger.warning("Extraction service unreachable", url=url, error=str(e))
            raise FetchError(FetchError.UNREACHABLE, url=url) from e

        if response.status_code >= 500:
            logger.warning("Extraction service error", url=url, status_code=response.status_code)
            raise FetchError(FetchError.UNREACHABLE, url=url)
        if not response.is_success:
            logger.info("Extraction rejected", url=url, status_code=response.status_code)
            raise FetchError(FetchError.UNSUPPORTED, url=url)

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(FetchError.UNSUPPORTED, url=url, message="Malformed extraction response") from e

        return self._to_descriptor(url, payload)

    def _to_descriptor(self, url: str, payload: Any) -> ContentDescriptor:
        if not isinstance(payload, dict) or payload.get("error"):
            message = payload.get("error") if isinstance(payload, dict) else None
            logger.info("Extraction unsupported", url=url, error=message)
            raise FetchError(FetchError.UNSUPPORTED, url=url)

        objects = payload.get("objects")
        if not isinstance(objects, list) or not objects or not isinstance(objects[0], dict):
            raise FetchError(FetchError.UNSUPPORTED, url=url, message="No content found at URL")

        item = objects[0]
        title = _text(item.get("title"))
        if not title:
            raise FetchError(FetchError.UNSUPPORTED, url=url, message="Content has no title")

        return ContentDescriptor(
            title=title,
            author=_text(item.get("author")),
            site_name=_text(item.get("siteName")),
            slyp_type=SlypType.from_extractor(_text(item.get("type"))),
            duration_seconds=_to_seconds(item.get("duration")),
            html=_text(item.get("html")),
            display_url=_primary_image(item.get("images")),
        )


def _to_seconds(raw: Any) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return None


def _text(raw: Any) -> Optional[str]:
    """Stripped string value, or None for blanks and non-strings."""
    if not isinstance(raw, str):
        return None
    return raw.strip() or None


def _primary_image(images: Any) -> Optional[str]:
    if not isinstance(images, list):
        return None
    candidates = [image for image in images if isinstance(image, dict) and _text(image.get("url"))]
    for image in candidates:
        if image.get("primary"):
            return image["url"]
    return candidates[0]["url"] if candidates else None


# Singleton instance for convenience
_extraction_adapter: Optional[ExtractionAdapter] = None


def get_extraction_adapter() -> ExtractionAdapter:
    """Get or create extraction adapter singleton."""
    global _extraction_adapter
    if _extraction_adapter is None:
        _extraction_adapter = ExtractionAdapter()
    return _extraction_adapter
