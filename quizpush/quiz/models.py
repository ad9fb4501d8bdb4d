"""
Data Models for Quiz Authoring
==============================

In-memory representation of a locally authored quiz. The synchronizer reads
these objects and never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class QuestionKind(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    SELECT_MULTIPLE = "select_multiple"
    TRUE_FALSE = "true_false"
    FILL_IN = "fill_in"
    DROPDOWN = "dropdown"
    FREE_RESPONSE = "free_response"


# Kinds the Canvas quiz publisher knows how to render
SUPPORTED_KINDS = frozenset({QuestionKind.MULTIPLE_CHOICE, QuestionKind.SELECT_MULTIPLE})


@dataclass
class Answer:
    text: str
    correct: bool = False
    explanation: str | None = None


@dataclass
class Question:
    text: str
    points: int = 1
    answers: list[Answer] = field(default_factory=list)
    kind: QuestionKind = QuestionKind.MULTIPLE_CHOICE
    raw: bool = False
    group_key: str | None = None
    comment: str | None = None

    @property
    def multiple(self) -> bool:
        """True for select-all-that-apply questions."""
        return self.kind is QuestionKind.SELECT_MULTIPLE

    @property
    def supported(self) -> bool:
        return self.kind in SUPPORTED_KINDS


@dataclass
class Quiz:
    title: str
    questions: list[Question] = field(default_factory=list)

    @property
    def points(self) -> int:
        """Total points across all questions."""
        return sum(q.points for q in self.questions)

    @property
    def ungrouped_questions(self) -> list[Question]:
        return [q for q in self.questions if q.group_key is None]

    @property
    def grouped_questions(self) -> list[Question]:
        return [q for q in self.questions if q.group_key is not None]

    def unsupported_questions(self) -> list[Question]:
        """Questions whose kind cannot be published."""
        return [q for q in self.questions if not q.supported]
