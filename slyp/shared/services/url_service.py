"""
URL service - URL normalization and validation.

The normalized form is the canonical key of a Slyp: two submissions that
normalize to the same string share one canonical record.
"""

import hashlib
from typing import Tuple
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from ..core.exceptions import UnprocessableError


class URLService:
    """Service for URL operations."""

    TRACKING_PARAMS = {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "ref",
        "fbclid",
        "gclid",
        "mc_cid",
        "mc_eid",
    }

    ALLOWED_SCHEMES = {"http", "https"}

    @staticmethod
    def validate(url: str) -> str:
        """
        Check that `url` is an absolute http(s) URL.

        Returns the stripped URL.

        Raises:
            UnprocessableError: If the URL is empty, relative or not http(s)
        """
        candidate = (url or "").strip()
        try:
            parsed = urlparse(candidate)
            # hostname and port raise on a bad port or an unclosed IPv6 literal
            hostname, _ = parsed.hostname, parsed.port
        except ValueError as e:
            raise UnprocessableError(
                f"URL is malformed: {e}",
                details={"url": url},
            ) from e
        if parsed.scheme.lower() not in URLService.ALLOWED_SCHEMES or not hostname:
            raise UnprocessableError(
                "URL must be an absolute http(s) URL",
                details={"url": url},
            )
        return candidate

    @staticmethod
    def normalize_url(url: str) -> str:
        """
        Normalize URL for deduplication.
        - Lowercase scheme and host (paths are case-sensitive)
        - Remove tracking parameters, sort the rest
        - Standardize to HTTPS and drop a leading "www."
        - Remove trailing slashes and fragments
        """
        parsed = urlparse(url.strip())

        host = (parsed.hostname or "").lower()
        if host.startswith("www."):
            host = host[len("www."):]
        netloc = host if parsed.port is None else f"{host}:{parsed.port}"

        # Remove tracking parameters
        clean_params = sorted(
            (k, v)
            for k, v in parse_qsl(parsed.query, keep_blank_values=True)
            if k.lower() not in URLService.TRACKING_PARAMS
        )

        # Rebuild URL
        normalized = urlunparse(
            (
                "https",  # Force HTTPS
                netloc,
                parsed.path.rstrip("/"),  # Remove trailing slash
                "",  # params
                urlencode(clean_params),
                "",  # fragment
            )
        )

        return normalized

    @staticmethod
    def generate_url_hash(url: str) -> str:
        """Generate SHA256 hash of normalized URL."""
        normalized = URLService.normalize_url(url)
        return hashlib.sha256(normalized.encode()).hexdigest()

    @staticmethod
    def validate_and_process(url: str) -> Tuple[str, str, str]:
        """
        Validate and process URL.
        Returns: (submitted_url, normalized_url, url_hash)
        """
        submitted = URLService.validate(url)
        normalized = URLService.normalize_url(submitted)
        url_hash = hashlib.sha256(normalized.encode()).hexdigest()

        return submitted, normalized, url_hash
