"""
Quiz loader for local quiz files.

Reads a YAML or JSON quiz description, validates it with Pydantic and builds
the Quiz/Question/Answer graph the synchronizer consumes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, model_validator

from quizpush.errors import ContentError
from quizpush.quiz.models import Answer, Question, QuestionKind, Quiz

QUIZ_FILE_SUFFIXES = (".yml", ".yaml", ".json")


class AnswerSpec(BaseModel):
    text: str
    correct: bool = False
    explanation: str | None = None


class QuestionSpec(BaseModel):
    text: str = Field(min_length=1)
    points: int = Field(default=1, ge=1)
    kind: QuestionKind | None = None
    multiple: bool = False
    raw: bool = False
    pool: str | None = None
    comment: str | None = None
    answers: list[AnswerSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _resolve_kind(self) -> QuestionSpec:
        # "multiple: true" is shorthand for the select-all kind
        if self.kind is None:
            self.kind = QuestionKind.SELECT_MULTIPLE if self.multiple else QuestionKind.MULTIPLE_CHOICE
        return self

    def to_question(self) -> Question:
        return Question(
            text=self.text,
            points=self.points,
            answers=[Answer(text=a.text, correct=a.correct, explanation=a.explanation) for a in self.answers],
            kind=self.kind,
            raw=self.raw,
            group_key=self.pool,
            comment=self.comment,
        )


class QuizSpec(BaseModel):
    title: str = Field(min_length=1)
    questions: list[QuestionSpec] = Field(default_factory=list)

    def to_quiz(self) -> Quiz:
        return Quiz(title=self.title, questions=[q.to_question() for q in self.questions])


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_quiz(path: Path | str) -> Quiz:
    """
    Load a quiz from a YAML or JSON file.

    Args:
        path: Path to the quiz file

    Returns:
        The parsed Quiz

    Raises:
        ContentError: If the file cannot be read or does not describe a valid quiz
    """
    path = Path(path)
    if path.suffix.lower() not in QUIZ_FILE_SUFFIXES:
        raise ContentError(f"Unsupported quiz file type '{path.suffix}' (expected one of {', '.join(QUIZ_FILE_SUFFIXES)})")

    try:
        document = _read_document(path)
    except OSError as e:
        raise ContentError(f"Cannot read quiz file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ContentError(f"Cannot parse quiz file {path}: {e}") from e

    if not isinstance(document, dict):
        raise ContentError(f"Quiz file {path} must contain a mapping at the top level")

    try:
        spec = QuizSpec.model_validate(document)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ContentError(f"Invalid quiz file {path}: {problems}") from e

    quiz = spec.to_quiz()
    logger.info("Loaded quiz '{}' with {} questions ({} points) from {}", quiz.title, len(quiz.questions), quiz.points, path)
    return quiz
