"""
Question payload rendering.

Pure translation from Question/Answer objects to the Canvas quiz_questions
wire format. Nothing here talks to the network.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any

from quizpush.canvas.config import (
    APPEND_POSITION,
    CORRECT_WEIGHT,
    INCORRECT_WEIGHT,
    SELECT_ALL_PREFIX,
)
from quizpush.quiz.models import Answer, Question

MULTIPLE_CHOICE_TYPE = "multiple_choice_question"
MULTIPLE_ANSWERS_TYPE = "multiple_answers_question"


@dataclass(frozen=True)
class TextKeys:
    """Field names for one text flavour."""

    answer: str
    answer_comment: str
    incorrect_comment: str


PLAIN_KEYS = TextKeys(
    answer="answer_text",
    answer_comment="answer_comments",
    incorrect_comment="incorrect_comments",
)
HTML_KEYS = TextKeys(
    answer="answer_html",
    answer_comment="answer_comments_html",
    incorrect_comment="incorrect_comments_html",
)

# Canvas keeps question_text as HTML in both flavours
QUESTION_TEXT_KEY = "question_text"


def text_keys(raw: bool) -> TextKeys:
    return HTML_KEYS if raw else PLAIN_KEYS


def question_name(points: int) -> str:
    """Human label like '1 point' or '3 points'."""
    return f"{points} point{'s' if points != 1 else ''}"


def question_type(question: Question) -> str:
    return MULTIPLE_ANSWERS_TYPE if question.multiple else MULTIPLE_CHOICE_TYPE


def render_answer(answer: Answer, raw: bool) -> dict[str, Any]:
    """Render one answer; weight is a percentage of credit."""
    keys = text_keys(raw)
    payload: dict[str, Any] = {
        keys.answer: answer.text,
        "answer_weight": CORRECT_WEIGHT if answer.correct else INCORRECT_WEIGHT,
    }
    if answer.explanation:
        payload[keys.answer_comment] = answer.explanation
    return payload


def render_question(question: Question, group_id: Any = None) -> dict[str, Any]:
    """
    Render a question into the body of a create-question call.

    Args:
        question: A multiple-choice or select-multiple question
        group_id: Remote group the question belongs to

    Returns:
        {"question": {...}} ready to be sent as JSON
    """
    keys = text_keys(question.raw)
    text = question.text if question.raw else html.escape(question.text)
    if question.multiple:
        text = SELECT_ALL_PREFIX + text

    payload: dict[str, Any] = {
        "quiz_group_id": group_id,
        "question_name": question_name(question.points),
        "question_type": question_type(question),
        "points_possible": question.points,
        QUESTION_TEXT_KEY: text,
        "position": APPEND_POSITION,
        "answers": [render_answer(a, question.raw) for a in question.answers],
    }
    if question.comment:
        payload[keys.incorrect_comment] = question.comment
    return {"question": payload}


class PayloadRenderer:
    """Renders questions for a given group; stateless apart from the group id."""

    def render(self, question: Question, group_id: Any = None) -> dict[str, Any]:
        return render_question(question, group_id)

    def render_answer(self, answer: Answer, raw: bool) -> dict[str, Any]:
        return render_answer(answer, raw)
