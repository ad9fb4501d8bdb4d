"""
Quiz module for the locally authored quiz model.

This module provides:
- Quiz, Question, Answer: the in-memory quiz graph
- QuestionKind: enumerated question kinds
- load_quiz: YAML/JSON quiz file loader

Question Kinds:
- multiple_choice: exactly one correct answer
- select_multiple: select all that apply
- true_false, fill_in, dropdown, free_response: authored but not publishable
"""

from .loader import load_quiz
from .models import SUPPORTED_KINDS, Answer, Question, QuestionKind, Quiz

__all__ = [
    "Answer",
    "Question",
    "QuestionKind",
    "Quiz",
    "SUPPORTED_KINDS",
    "load_quiz",
]
