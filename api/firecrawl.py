"""Firecrawl-compatible scrape integration.

Used as the fallback for hosts without a dedicated adapter. The endpoint is
any service that accepts Firecrawl's ``/scrape`` request body and answers
with ``{"success": true, "data": {"markdown": ...}}``, such as
https://api.firecrawl.dev/v1/scrape or a self-hosted Firecrawl.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.errors import UpstreamFailure
from models.config import Settings

__all__ = ["SERVICE", "scrape"]

SERVICE = "scraper"

logger = logging.getLogger(__name__)


def _get_headers(api_key: Optional[str]) -> Dict[str, str]:
    """Build request headers, with authorization when a key is configured."""
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def _build_payload(url: str, timeout: float) -> Dict[str, Any]:
    return {
        "url": url,
        "formats": ["markdown"],
        "onlyMainContent": True,
        "timeout": int(timeout * 1000),
    }


async def scrape(client: httpx.AsyncClient, settings: Settings, url: str) -> str:
    """Scrape ``url`` and return its main content as markdown, unmodified.

    Raises:
        UpstreamFailure: no endpoint is configured, the request failed, or
            the service reported an unsuccessful scrape.
    """
    if not settings.scrape_endpoint:
        raise UpstreamFailure(SERVICE, "SCRAPE_ENDPOINT is not configured")

    try:
        response = await client.post(
            settings.scrape_endpoint,
            headers=_get_headers(settings.scrape_api_key),
            json=_build_payload(url, settings.scrape_timeout),
            # Give the service a little longer than the page timeout it was given
            timeout=settings.scrape_timeout + 5.0,
        )
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        error_msg = f"HTTP {status}"
        if status == 402:
            error_msg = "Payment required - check credits"
        elif status == 429:
            error_msg = "Rate limit exceeded"
        elif status == 408:
            error_msg = "Request timeout - page may be slow"
        logger.warning(f"Scrape of {url} failed: {error_msg}")
        raise UpstreamFailure(SERVICE, error_msg, status) from e
    except httpx.HTTPError as e:
        logger.warning(f"Scrape of {url} failed: {e}")
        raise UpstreamFailure(SERVICE, f"request failed: {e}") from e
    except ValueError as e:
        raise UpstreamFailure(SERVICE, "malformed JSON response") from e

    if not data.get("success"):
        raise UpstreamFailure(SERVICE, str(data.get("error", "Unknown error")))

    markdown = (data.get("data") or {}).get("markdown")
    if not isinstance(markdown, str):
        raise UpstreamFailure(SERVICE, "response has no markdown content")
    return markdown
