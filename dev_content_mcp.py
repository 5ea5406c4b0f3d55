#!/usr/bin/env python3
"""
Dev Content MCP Server

An MCP server that lets an agent search the web for software-development
topics and fetch readable content from the pages it finds.

Tools:
- search: Google Programmable Search, with each result's metadata classified
  (forum thread, Q&A page, documentation page, or unknown) for display
- fetch: normalized content for a URL
    - stackoverflow.com: question plus every answer, accepted ones marked
    - developer.mozilla.org: page from a local mdn/content mirror
    - www.reddit.com: submission plus flattened comment tree
    - anything else: fallback scraper, when configured
"""

import json
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, List

import httpx
from dotenv import load_dotenv
from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from api.google import search as search_web
from core.classifier import summarize
from core.dispatch import fetch_content
from core.errors import GatewayError
from models import ResponseFormat, SearchInput, SearchResult, Settings

logger = logging.getLogger(__name__)

USER_AGENT = "DevContentMCP/1.0"


def configure_logging(level: str = "WARNING") -> None:
    """Log to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


# ============================================================================
# Server Context
# ============================================================================


@dataclass(frozen=True)
class ServerContext:
    """Shared, read-only resources for the server lifetime."""

    settings: Settings
    client: httpx.AsyncClient


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Load settings and open the HTTP client on startup, close on shutdown."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    active = [name for name, ok in settings.capabilities().items() if ok]
    logger.info(f"Active sources: {', '.join(active)}")

    async with create_http_client(settings) as client:
        yield ServerContext(settings=settings, client=client)


mcp = FastMCP(
    "dev_content_mcp",
    instructions="""\
Search the web with `search`, then read promising results with `fetch`.

`fetch` returns a list of text blocks:
- Stack Overflow: the question first, then every answer in the site's order,
  each marked Accepted/Unaccepted with its score.
- Reddit: the submission as [0], then each comment as [n], with
  "(reply to [m])" pointing at the comment it answers.
- MDN: the page source with cross-references shown as `code`.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# ============================================================================
# Tool Implementations
# ============================================================================


def format_results(results: List[SearchResult], response_format: ResponseFormat) -> str:
    """Render search results as markdown sections or a JSON array."""
    if response_format == ResponseFormat.JSON:
        return json.dumps([r.model_dump(mode="json") for r in results], indent=2)

    if not results:
        return "No results found."

    sections = []
    for position, result in enumerate(results, 1):
        lines = [f"## {position}. {result.title}", result.link]
        if result.snippet:
            lines.append(result.snippet)
        summary = summarize(result.metadata)
        if summary:
            lines.append(f"\n[{result.metadata.shape.value}]\n{summary}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


async def run_search(ctx: ServerContext, params: SearchInput) -> str:
    results = await search_web(ctx.client, ctx.settings, params)
    return format_results(results, params.response_format)


async def run_fetch(ctx: ServerContext, url: str) -> List[str]:
    return await fetch_content(url, ctx.client, ctx.settings)


def _tool_error(error: GatewayError) -> ToolError:
    logger.warning(str(error))
    return ToolError(json.dumps(error.to_dict()))


# ============================================================================
# MCP Tools
# ============================================================================


@mcp.tool(
    name="search",
    annotations={
        "title": "Search the Web for Developer Content",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search(params: SearchInput, ctx: Context) -> str:
    """
    Search the web for software-development topics.

    Args:
        params (SearchInput): Search parameters:
            - query (str): Free-text query
            - exact_terms (Optional[str]): Phrase every result must contain
            - exclude_terms (Optional[str]): Phrase no result may contain
            - start (Optional[int]): Index of first result (0-255)
            - response_format (str): 'markdown' (default) or 'json'

    Returns:
        str: One section per result with title, link, snippet and a summary
            of the page metadata (thread, Q&A, documentation or raw).

    Examples:
        - query="on mouse over event handler"
        - query="asyncio gather exceptions", exclude_terms="trio"
    """
    try:
        return await run_search(_ctx(ctx), params)
    except GatewayError as e:
        raise _tool_error(e) from e


@mcp.tool(
    name="fetch",
    annotations={
        "title": "Fetch Normalized Page Content",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def fetch(url: str, ctx: Context) -> List[str]:
    """
    Fetch readable content for a URL, usually one returned by `search`.

    Args:
        url (str): Absolute URL, e.g.
            https://stackoverflow.com/questions/12345/some-title

    Returns:
        list[str]: Ordered text blocks (question then answers, submission then
            comments, or a single page).

    Notes:
        - Fails with a structured error (kind, message, context) instead of
          returning partial content.
        - Other hosts work only when a fallback scraper is configured.
    """
    try:
        return await run_fetch(_ctx(ctx), url)
    except GatewayError as e:
        raise _tool_error(e) from e


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    load_dotenv()
    mcp.run()


if __name__ == "__main__":
    main()
