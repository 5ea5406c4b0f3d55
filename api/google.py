"""Google Programmable Search (Custom Search JSON API) integration.

Translates a ``SearchInput`` into Custom Search parameters and classifies
each result's ``pagemap`` so it can be displayed by shape.
"""

import logging
from typing import Any, Dict, List

import httpx

from core.classifier import classify
from core.errors import UpstreamFailure
from models.config import Settings
from models.search import SearchInput, SearchResult

__all__ = ["BASE_URL", "SERVICE", "build_params", "parse_results", "search"]

BASE_URL = "https://customsearch.googleapis.com/customsearch/v1"
SERVICE = "google_search"

logger = logging.getLogger(__name__)


def build_params(query: SearchInput, settings: Settings) -> Dict[str, Any]:
    """Build the request parameters; optional terms are sent only when set."""
    params: Dict[str, Any] = {}
    if query.exact_terms:
        params["exactTerms"] = query.exact_terms
    if query.exclude_terms:
        params["excludeTerms"] = query.exclude_terms
    if query.start is not None:
        params["start"] = query.start
    params["q"] = query.query
    params["cx"] = settings.google_search_engine_id
    params["key"] = settings.google_search_api_key
    return params


def parse_results(data: Dict[str, Any]) -> List[SearchResult]:
    """Normalize a Custom Search response body. No ``items`` means no hits."""
    results: List[SearchResult] = []
    for item in data.get("items") or []:
        link = item.get("link")
        if not link:
            continue
        results.append(
            SearchResult(
                title=item.get("title", "Untitled"),
                snippet=item.get("snippet", ""),
                link=link,
                metadata=classify(item.get("pagemap")),
            )
        )
    return results


async def search(
    client: httpx.AsyncClient, settings: Settings, query: SearchInput
) -> List[SearchResult]:
    """Run a web search.

    Raises:
        UpstreamFailure: credentials are missing or the request failed.
    """
    if not settings.google_configured:
        raise UpstreamFailure(
            SERVICE, "GOOGLE_SEARCH_ENGINE_ID and GOOGLE_SEARCH_API_KEY must be set"
        )

    try:
        response = await client.get(
            BASE_URL,
            params=build_params(query, settings),
            timeout=settings.http_timeout,
        )
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        if status in (400, 403):
            logger.error("Google search: invalid API key or engine id")
        elif status == 429:
            logger.warning("Google search: rate limit exceeded")
        raise UpstreamFailure(SERVICE, f"HTTP {status}", status) from e
    except httpx.HTTPError as e:
        logger.warning(f"Google search request failed: {e}")
        raise UpstreamFailure(SERVICE, f"request failed: {e}") from e
    except ValueError as e:
        raise UpstreamFailure(SERVICE, "malformed JSON response") from e

    results = parse_results(data)
    logger.info(f"Google: {len(results)} results for '{query.query}'")
    return results
