"""
Content adapter dispatch.

Routes a URL to the adapter for its host. Hosts are compared by exact
string equality: ``stackoverflow.com.evil.example`` or
``evil.example/stackoverflow.com`` never reach the Stack Overflow adapter.
Unknown hosts go to the fallback scraper when one is configured.
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from api import firecrawl, mdn, reddit
from core.errors import InvalidUrl, MissingIdentifier, UnsupportedHost
from core.qa import assemble_qa
from core.thread import flatten
from models.config import Settings

__all__ = [
    "STACKOVERFLOW_HOST",
    "MDN_HOST",
    "REDDIT_HOST",
    "fetch_content",
    "path_segment",
]

STACKOVERFLOW_HOST = "stackoverflow.com"
MDN_HOST = mdn.HOST
REDDIT_HOST = "www.reddit.com"

logger = logging.getLogger(__name__)


def path_segment(path: str, position: int) -> Optional[str]:
    """Return the 1-based ``position``-th segment of a URL path, if present.

    ``/questions/12345/title`` has ``questions`` at 1 and ``12345`` at 2.
    """
    segments = path.split("/")[1:] if path.startswith("/") else path.split("/")
    if len(segments) < position:
        return None
    return segments[position - 1] or None


def _host(netloc: str) -> str:
    """Host part of a netloc, case preserved (urlparse.hostname lower-cases it)."""
    hostport = netloc.rsplit("@", 1)[-1]
    if hostport.startswith("["):
        return hostport[: hostport.find("]") + 1]
    return hostport.split(":", 1)[0]


async def _stackoverflow(
    client: httpx.AsyncClient, settings: Settings, url: str, path: str
) -> List[str]:
    question_id = path_segment(path, 2)
    if question_id is None or not question_id.isdigit():
        raise MissingIdentifier(url, "question id")
    return await assemble_qa(client, settings, question_id)


def _mdn(settings: Settings, path: str) -> List[str]:
    return [mdn.load(settings, path)]


async def _reddit(settings: Settings, url: str, path: str) -> List[str]:
    # /r/<subreddit>/comments/<id>/<slug>/
    submission_id = path_segment(path, 4)
    if submission_id is None:
        raise MissingIdentifier(url, "submission id")
    depth = settings.reddit_comment_depth
    limit = settings.reddit_comment_limit
    submission, arena = await reddit.fetch_thread(settings, submission_id, depth, limit)
    return flatten(submission, arena, max_depth=depth, max_children=limit)


async def fetch_content(
    url: str, client: httpx.AsyncClient, settings: Settings
) -> List[str]:
    """Fetch ``url`` through the matching adapter as ordered text blocks.

    Raises:
        InvalidUrl: the URL has no host.
        MissingIdentifier: a known host, but the path lacks the id it needs.
        UnsupportedHost: unknown host and no fallback scraper configured.
        UpstreamEmpty, UpstreamFailure, NotFound: from the adapters.
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrl(url, "Unparseable URL") from e

    host = _host(parsed.netloc)
    if not host:
        raise InvalidUrl(url)

    logger.info(f"Fetching {url} via host {host}")

    if host == STACKOVERFLOW_HOST:
        return await _stackoverflow(client, settings, url, parsed.path)
    if host == MDN_HOST:
        return _mdn(settings, parsed.path)
    if host == REDDIT_HOST:
        return await _reddit(settings, url, parsed.path)
    if settings.scrape_endpoint:
        return [await firecrawl.scrape(client, settings, url)]
    raise UnsupportedHost(host)
