"""Search input/output models for the Dev Content MCP.

Search results carry a ``pagemap`` block whose structure depends on the site
that produced the page. The shape models below describe the layouts we know
how to display; ``core.classifier`` decides which one a block matches.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from models.config import ResponseFormat


class SearchInput(BaseModel):
    """Input model for the search tool."""

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="forbid"
    )

    query: str = Field(
        ...,
        description="Free-text search query, e.g. 'mouseover event handler'",
        min_length=1,
        max_length=2048,
    )
    exact_terms: Optional[str] = Field(
        default=None,
        description="Phrase that every result must contain",
        max_length=2048,
    )
    exclude_terms: Optional[str] = Field(
        default=None,
        description="Word or phrase that must not appear in any result",
        max_length=2048,
    )
    # The API never pages past 100 results, so a byte is plenty
    start: Optional[int] = Field(
        default=None,
        description="Index of the first result to return (0-255)",
        ge=0,
        le=255,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' (default) or 'json'",
    )


# ══════════════════════════════════════════════════════════════════════════════
# Metadata Shapes
# ══════════════════════════════════════════════════════════════════════════════


class ShapeTag(str, Enum):
    """Known layouts of result metadata."""

    FORUM = "forum"
    QA = "qa"
    DOC = "doc"
    UNKNOWN = "unknown"


class _Shape(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ForumPosting(_Shape):
    headline: StrictStr
    text: Optional[StrictStr] = None
    author: Optional[StrictStr] = None
    url: Optional[StrictStr] = None
    commentcount: Optional[StrictStr] = None
    upvotecount: Optional[StrictStr] = None


class ForumShape(_Shape):
    """Discussion thread page (Reddit and similar forums)."""

    discussionforumposting: List[ForumPosting] = Field(min_length=1)
    metatags: List[Dict[str, Any]] = Field(min_length=1)


class QAQuestionMeta(_Shape):
    name: StrictStr
    text: StrictStr
    upvotecount: StrictStr
    answercount: Optional[StrictStr] = None


class QAAnswerMeta(_Shape):
    text: StrictStr
    upvotecount: StrictStr


class QAShape(_Shape):
    """Stack Exchange style question page."""

    question: List[QAQuestionMeta] = Field(min_length=1)
    answer: List[QAAnswerMeta]


class DocMetatag(_Shape):
    title: StrictStr = Field(alias="og:title")
    description: StrictStr = Field(alias="og:description")


class DocShape(_Shape):
    """Documentation page described only by its Open Graph tags."""

    metatags: List[DocMetatag] = Field(min_length=1)


class UnknownShape(_Shape):
    """Anything else, kept verbatim."""

    raw: Any = None


ShapeValue = Union[ForumShape, QAShape, DocShape, UnknownShape]


class ClassifiedMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    shape: ShapeTag
    value: ShapeValue


class SearchResult(BaseModel):
    """A single web search hit, with its metadata already classified."""

    model_config = ConfigDict(frozen=True)

    title: str
    snippet: str
    link: str
    metadata: ClassifiedMetadata
