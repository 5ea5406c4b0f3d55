"""Stack Exchange question and answer items."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Item(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Question(_Item):
    question_id: int
    title: str
    body: str = ""
    score: int = 0
    owner_reputation: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    answer_count: int = 0

    @classmethod
    def from_api(cls, item: dict) -> "Question":
        owner = item.get("owner") or {}
        return cls(
            question_id=item["question_id"],
            title=item.get("title", ""),
            body=item.get("body", ""),
            score=item.get("score", 0),
            owner_reputation=owner.get("reputation"),
            tags=item.get("tags", []),
            answer_count=item.get("answer_count", 0),
        )


class Answer(_Item):
    answer_id: int
    question_id: int
    body: str = ""
    score: int = 0
    is_accepted: bool = False

    @classmethod
    def from_api(cls, item: dict) -> "Answer":
        return cls(
            answer_id=item["answer_id"],
            question_id=item["question_id"],
            body=item.get("body", ""),
            score=item.get("score", 0),
            is_accepted=item.get("is_accepted", False),
        )


QAItem = Union[Question, Answer]
