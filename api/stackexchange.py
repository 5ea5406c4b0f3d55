"""
Stack Exchange API Integration.

Fetches a single question and its answers from a Stack Exchange site
(Stack Overflow by default) with full bodies included.

API: https://api.stackexchange.com/docs
Rate Limits: 300/day (anonymous), 10,000/day (with API key)
"""

import asyncio
import logging
from typing import Any

import httpx

from core.errors import UpstreamFailure
from models.config import Settings
from models.qa import Answer, Question

__all__ = [
    "API_BASE",
    "SERVICE",
    "fetch_questions",
    "fetch_answers",
    "build_params",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_BASE = "https://api.stackexchange.com/2.3"
SERVICE = "stackexchange"

# Built-in filter that adds the HTML body to questions and answers
BODY_FILTER = "withbody"
PAGE_SIZE = 100

logger = logging.getLogger(__name__)


def build_params(settings: Settings) -> dict[str, Any]:
    """Parameters shared by every call, so questions and answers match."""
    params: dict[str, Any] = {
        "site": settings.stackexchange_site,
        "filter": BODY_FILTER,
        "order": "desc",
        "sort": "votes",
        "pagesize": PAGE_SIZE,
    }
    if settings.stackexchange_api_key:
        params["key"] = settings.stackexchange_api_key
    return params


async def _get_page(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, Any],
    timeout: float,
) -> dict[str, Any]:
    try:
        response = await client.get(f"{API_BASE}{path}", params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(f"HTTP {e.response.status_code} from {path}")
        raise UpstreamFailure(
            SERVICE, f"HTTP {e.response.status_code} for {path}", e.response.status_code
        ) from e
    except httpx.HTTPError as e:
        logger.warning(f"Request to {path} failed: {e}")
        raise UpstreamFailure(SERVICE, f"request failed for {path}: {e}") from e
    except ValueError as e:
        raise UpstreamFailure(SERVICE, f"malformed JSON from {path}") from e

    if "error_id" in data:
        message = data.get("error_message", "Unknown error")
        logger.warning(f"API error {data['error_id']}: {message}")
        raise UpstreamFailure(SERVICE, message, data.get("error_id"))

    logger.debug(f"Quota remaining: {data.get('quota_remaining')}")
    return data


async def _get_items(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, Any],
    timeout: float,
) -> list[dict[str, Any]]:
    """Collect every page of ``path``, following ``has_more``."""
    items: list[dict[str, Any]] = []
    page = 1
    while True:
        data = await _get_page(client, path, {**params, "page": page}, timeout)
        batch = data.get("items", [])
        items.extend(batch)
        if not data.get("has_more") or not batch:
            return items
        # The API asks callers to wait this many seconds before the next request
        if data.get("backoff"):
            await asyncio.sleep(data["backoff"])
        page += 1


# ══════════════════════════════════════════════════════════════════════════════
# Question & Answer Fetching
# ══════════════════════════════════════════════════════════════════════════════


async def fetch_questions(
    client: httpx.AsyncClient, settings: Settings, question_id: str
) -> list[Question]:
    """Fetch a question by id. An unknown or deleted id yields an empty list."""
    items = await _get_items(
        client, f"/questions/{question_id}", build_params(settings), settings.http_timeout
    )
    try:
        return [Question.from_api(item) for item in items]
    except (KeyError, ValueError) as e:
        raise UpstreamFailure(SERVICE, f"unexpected question payload: {e}") from e


async def fetch_answers(
    client: httpx.AsyncClient, settings: Settings, question_id: str
) -> list[Answer]:
    """Fetch every answer to a question, in the order the API returns them."""
    items = await _get_items(
        client,
        f"/questions/{question_id}/answers",
        build_params(settings),
        settings.http_timeout,
    )
    try:
        return [Answer.from_api(item) for item in items]
    except (KeyError, ValueError) as e:
        raise UpstreamFailure(SERVICE, f"unexpected answer payload: {e}") from e
