"""
Canvas publishing for quizpush.

This module provides:
- QuizSynchronizer: replace-or-create orchestration of one quiz
- GroupingStrategy: partitioning questions into Canvas question groups
- PayloadRenderer: question/answer wire payloads
- RemoteCallExecutor: dry-run gating and error translation
- compute_time_limit: quiz time limit from total points
"""

from .config import DEFAULT_QUIZ_OPTIONS, CanvasOptions, load_canvas_options
from .executor import CallResult, RemoteCallExecutor
from .grouping import GroupingStrategy, Pool
from .renderer import PayloadRenderer
from .synchronizer import QuizSynchronizer, SyncContext, SyncResult, synchronize
from .time_limit import compute_time_limit

__all__ = [
    "CallResult",
    "CanvasOptions",
    "DEFAULT_QUIZ_OPTIONS",
    "GroupingStrategy",
    "PayloadRenderer",
    "Pool",
    "QuizSynchronizer",
    "RemoteCallExecutor",
    "SyncContext",
    "SyncResult",
    "compute_time_limit",
    "load_canvas_options",
    "synchronize",
]
