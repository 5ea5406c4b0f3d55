"""
Data models for the Dev Content MCP.

Provides Pydantic models for tool input validation, result metadata shapes,
Stack Exchange items, discussion thread structures and runtime settings.
"""

from models.config import ResponseFormat, Settings
from models.qa import Answer, QAItem, Question
from models.search import (
    ClassifiedMetadata,
    DocShape,
    ForumShape,
    QAShape,
    SearchInput,
    SearchResult,
    ShapeTag,
    UnknownShape,
)
from models.thread import Submission, ThreadArena, ThreadNode

__all__ = [
    # Configuration
    "ResponseFormat",
    "Settings",
    # Search
    "SearchInput",
    "SearchResult",
    "ShapeTag",
    "ClassifiedMetadata",
    "ForumShape",
    "QAShape",
    "DocShape",
    "UnknownShape",
    # Q&A
    "Question",
    "Answer",
    "QAItem",
    # Threads
    "Submission",
    "ThreadNode",
    "ThreadArena",
]
