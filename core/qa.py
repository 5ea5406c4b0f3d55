"""
Q&A transcript assembly.

Turns a Stack Overflow question id into an ordered list of text blocks:
the question first, then every answer in the order the API returned them.
Answers are not re-sorted; each one states its score and whether it was
accepted so the reader can weigh them.
"""

import asyncio
import logging
from typing import List

import httpx

from api.stackexchange import SERVICE, fetch_answers, fetch_questions
from core.errors import MissingIdentifier, UpstreamEmpty
from models.config import Settings
from models.qa import Answer, Question
from utils.text import html_to_text, unescape

__all__ = ["assemble_qa", "render_question", "render_answer"]

logger = logging.getLogger(__name__)


def render_question(question: Question) -> str:
    meta = [f"Score: {question.score}", f"Answers: {question.answer_count}"]
    if question.tags:
        meta.append(f"Tags: {', '.join(question.tags)}")
    if question.owner_reputation is not None:
        meta.append(f"Asker reputation: {question.owner_reputation}")
    return (
        f"# {unescape(question.title)}\n"
        f"{' | '.join(meta)}\n\n"
        f"{html_to_text(question.body)}"
    )


def render_answer(answer: Answer) -> str:
    status = "Accepted" if answer.is_accepted else "Unaccepted"
    return f"## {status} answer (score {answer.score})\n\n{html_to_text(answer.body)}"


async def assemble_qa(
    client: httpx.AsyncClient, settings: Settings, question_id: str
) -> List[str]:
    """Fetch a question and its answers and render them in order.

    Raises:
        MissingIdentifier: ``question_id`` is empty or not numeric.
        UpstreamEmpty: no question exists with that id.
        UpstreamFailure: either API call failed.
    """
    if not question_id or not question_id.isdigit():
        raise MissingIdentifier(question_id, "numeric question id")

    # Wait for both calls even when one fails, then report the first failure
    results = await asyncio.gather(
        fetch_questions(client, settings, question_id),
        fetch_answers(client, settings, question_id),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    questions, answers = results

    if not questions:
        raise UpstreamEmpty(SERVICE, question_id)

    logger.info(f"Question {question_id}: {len(answers)} answers")
    blocks = [render_question(questions[0])]
    blocks.extend(render_answer(answer) for answer in answers)
    return blocks
