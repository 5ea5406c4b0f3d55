"""
Discussion thread flattening.

Walks a comment tree depth-first, pre-order, in source order and renders
each comment as its own block. Every comment gets a small contextual id the
first time it is visited (the submission is always 0) and replies point at
their parent by that id instead of the long native one.

Comments without a body (deleted or removed) render nothing, but they still
consume an id and their replies are still visited, so later references
resolve. A reply whose parent was never seen points at the submission.
"""

import logging
from typing import Dict, List, Optional, Tuple

from models.thread import Submission, ThreadArena, ThreadNode

__all__ = ["ROOT_ID", "UNKNOWN_AUTHOR", "flatten", "render_submission", "render_comment"]

logger = logging.getLogger(__name__)

ROOT_ID = 0
UNKNOWN_AUTHOR = "unknown"


def render_submission(submission: Submission) -> str:
    author = submission.author or UNKNOWN_AUTHOR
    lines = [
        f"# {submission.title}",
        f"[{ROOT_ID}] r/{submission.subreddit} | u/{author} | score {submission.score}",
    ]
    if submission.link:
        lines.append(f"Link: {submission.link}")
    if submission.body:
        lines.extend(["", submission.body])
    return "\n".join(lines)


def render_comment(contextual_id: int, node: ThreadNode, parent_id: Optional[int]) -> str:
    header = f"[{contextual_id}] u/{node.author or UNKNOWN_AUTHOR}"
    if parent_id is not None:
        header += f" (reply to [{parent_id}])"
    return f"{header}\n{node.body}"


class _IdMap:
    """Native id to contextual id, in first-visit order."""

    def __init__(self, root_native_id: str):
        self._ids: Dict[str, int] = {root_native_id: ROOT_ID}
        self._next = ROOT_ID + 1

    def register(self, native_id: str) -> int:
        if native_id not in self._ids:
            self._ids[native_id] = self._next
            self._next += 1
        return self._ids[native_id]

    def resolve(self, native_id: str) -> int:
        contextual_id = self._ids.get(native_id)
        if contextual_id is None:
            logger.debug(f"Parent {native_id} never visited, pointing at root")
            return ROOT_ID
        return contextual_id


def flatten(
    submission: Submission,
    arena: ThreadArena,
    max_depth: Optional[int] = None,
    max_children: Optional[int] = None,
) -> List[str]:
    """Render a submission and its comment tree as an ordered list of blocks.

    Args:
        submission: The root post, always rendered first with id 0.
        arena: Comment tree; ``arena.roots`` are the top-level comments.
        max_depth: Deepest comment level to visit (1 = top-level only).
            ``None`` visits everything.
        max_children: Most children to visit under any one node (and the
            most top-level comments). ``None`` visits all of them.
    """
    ids = _IdMap(submission.native_id)
    blocks = [render_submission(submission)]

    def limited(indices: List[int]) -> List[int]:
        return indices if max_children is None else indices[:max_children]

    # Explicit stack of (arena index, depth); children are pushed reversed
    # so they pop in source order.
    stack: List[Tuple[int, int]] = [(i, 1) for i in reversed(limited(arena.roots))]
    while stack:
        index, depth = stack.pop()
        node = arena.nodes[index]
        contextual_id = ids.register(node.native_id)

        if node.body:
            parent_id = (
                ids.resolve(node.parent_native_id)
                if node.parent_native_id is not None
                else None
            )
            blocks.append(render_comment(contextual_id, node, parent_id))

        if max_depth is None or depth < max_depth:
            stack.extend((child, depth + 1) for child in reversed(limited(node.children)))

    logger.info(f"Flattened {len(blocks) - 1} comments of {submission.native_id}")
    return blocks
