"""
Reddit API integration via redditwarp.

Fetches a submission together with a depth- and breadth-limited comment
tree and converts it into a ``ThreadArena``. Each fetch logs in with its own
client, so no session is shared between concurrent tool calls.
"""

import logging
from typing import Any, Optional, Tuple

from redditwarp.ASYNC import Client as RedditClient

from core.errors import InvalidInput, UpstreamFailure
from models.config import Settings
from models.thread import Submission, ThreadArena

__all__ = ["SERVICE", "fetch_thread", "submission_from_model", "arena_from_tree"]

SERVICE = "reddit"
REMOVED_BODIES = {"[deleted]", "[removed]"}
REMOVED_AUTHORS = {"[deleted]", "[removed]"}

logger = logging.getLogger(__name__)


def _body(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip() in REMOVED_BODIES:
        return None
    return value


def _author(value: Optional[str]) -> Optional[str]:
    # redditwarp reports deleted and suspended accounts by placeholder name
    if not value or value.strip() in REMOVED_AUTHORS:
        return None
    return value


def submission_from_model(subm: Any) -> Submission:
    """Normalize a redditwarp submission (text, link or gallery post)."""
    subreddit = getattr(subm, "subreddit", None)
    link = getattr(subm, "link", None)
    return Submission(
        native_id=subm.id36,
        title=subm.title,
        subreddit=getattr(subreddit, "name", "") or "",
        score=getattr(subm, "score", 0),
        author=_author(getattr(subm, "author_display_name", None)),
        body=_body(getattr(subm, "body", None)),
        link=link if isinstance(link, str) else None,
    )


def arena_from_tree(tree: Any, submission_id: str) -> ThreadArena:
    """Copy a redditwarp comment tree into an index-based arena.

    Tree nodes expose ``.value`` (the comment) and ``.children``; children
    keep the order Reddit returned them in.
    """
    arena = ThreadArena()
    pending = [(child, None) for child in reversed(tree.children)]
    while pending:
        node, under = pending.pop()
        comment = node.value
        parent = getattr(comment, "parent_comment_id36", None) or submission_id
        index = arena.add(
            comment.id36,
            parent_native_id=parent,
            author=_author(getattr(comment, "author_display_name", None)),
            body=_body(getattr(comment, "body", None)),
            under=under,
        )
        pending.extend((child, index) for child in reversed(node.children))
    return arena


def _make_client(settings: Settings) -> RedditClient:
    if not settings.reddit_configured:
        raise UpstreamFailure(
            SERVICE,
            "REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET and REDDIT_REFRESH_TOKEN must be set",
        )
    return RedditClient(
        settings.reddit_client_id,
        settings.reddit_client_secret,
        settings.reddit_refresh_token,
    )


async def fetch_thread(
    settings: Settings,
    submission_id: str,
    depth: Optional[int] = None,
    limit: Optional[int] = None,
) -> Tuple[Submission, ThreadArena]:
    """Fetch a submission and its comment tree.

    Args:
        settings: Runtime settings holding the Reddit credentials.
        submission_id: Base-36 submission id, e.g. ``"10gudzi"``.
        depth: Comment depth to request (defaults to settings).
        limit: Comment count to request (defaults to settings).
    """
    try:
        idn = int(submission_id, 36)
    except ValueError as e:
        raise InvalidInput(
            f"Not a Reddit submission id: {submission_id!r}", id=submission_id
        ) from e

    depth = depth or settings.reddit_comment_depth
    limit = limit or settings.reddit_comment_limit

    client = _make_client(settings)
    try:
        async with client:
            tree = await client.p.comment_tree.fetch(
                idn, sort="top", limit=limit, depth=depth
            )
    except Exception as e:
        logger.warning(f"Reddit fetch for {submission_id} failed: {e}")
        raise UpstreamFailure(SERVICE, f"could not fetch {submission_id}: {e}") from e

    submission = submission_from_model(tree.value)
    arena = arena_from_tree(tree, submission.native_id)
    logger.info(f"Reddit {submission_id}: {len(arena)} comments")
    return submission, arena
