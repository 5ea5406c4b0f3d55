"""
Result shape classification.

Search result metadata (Google's ``pagemap``) has no type field; its layout
depends on the markup of the page that was indexed. We try each known shape
in order of decreasing specificity and keep the first that validates.
Anything that matches nothing is kept verbatim as ``UnknownShape``.
"""

import json
import logging
from typing import Any, List, Tuple, Type

from pydantic import BaseModel, ValidationError

from models.search import (
    ClassifiedMetadata,
    DocShape,
    ForumShape,
    QAShape,
    ShapeTag,
    UnknownShape,
)

__all__ = ["SHAPE_ORDER", "classify", "summarize"]

logger = logging.getLogger(__name__)

# Forum pages also carry metatags, so they must be tried before DocShape.
SHAPE_ORDER: Tuple[Tuple[ShapeTag, Type[BaseModel]], ...] = (
    (ShapeTag.FORUM, ForumShape),
    (ShapeTag.QA, QAShape),
    (ShapeTag.DOC, DocShape),
)

SNIPPET_LIMIT = 500


def classify(raw: Any) -> ClassifiedMetadata:
    """Tag a raw metadata block with the first shape it parses as."""
    for tag, model in SHAPE_ORDER:
        try:
            value = model.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"Not a {tag.value} block: {e.error_count()} errors")
            continue
        return ClassifiedMetadata(shape=tag, value=value)
    return ClassifiedMetadata(shape=ShapeTag.UNKNOWN, value=UnknownShape(raw=raw))


def _clip(text: str, limit: int = SNIPPET_LIMIT) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[:limit] + "..."


def summarize(metadata: ClassifiedMetadata) -> str:
    """Render classified metadata as a short block of readable text."""
    value = metadata.value

    if isinstance(value, ForumShape):
        lines: List[str] = []
        for post in value.discussionforumposting:
            line = f"Thread: {post.headline}"
            if post.author:
                line += f" (by {post.author})"
            if post.commentcount:
                line += f", {post.commentcount} comments"
            lines.append(line)
            if post.text:
                lines.append(_clip(post.text))
        return "\n".join(lines)

    if isinstance(value, QAShape):
        question = value.question[0]
        lines = [
            f"Question ({question.upvotecount} votes, "
            f"{question.answercount or len(value.answer)} answers): {question.name}",
            _clip(question.text),
        ]
        if value.answer:
            top = value.answer[0]
            lines.append(f"Top answer ({top.upvotecount} votes): {_clip(top.text)}")
        return "\n".join(lines)

    if isinstance(value, DocShape):
        tag = value.metatags[0]
        return f"{tag.title}: {_clip(tag.description)}"

    if value.raw is None:
        return ""
    return _clip(json.dumps(value.raw, sort_keys=True, default=str), 1000)
