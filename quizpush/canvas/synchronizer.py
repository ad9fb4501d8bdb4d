"""
Canvas quiz synchronizer for quizpush.

Publishes a local Quiz to Canvas with a truncate-and-replace strategy.
Handles:
- Content validation before any remote call
- Replacing an existing quiz (delete its questions and groups, update title/time limit)
- Creating a new quiz from default options plus user overrides
- One remote group per pool, questions submitted strictly in order
- Dry runs: reads are real, writes are logged and simulated
- Counters for the final summary

We must set up the following before adding questions:
  1) create the quiz (unless a quiz id is given, in which case truncate it)
  2) for each pool, sorted so that same-pool questions are together:
     - start a new question group
     - add each member question, pointing at that group
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from quizpush.canvas.client import CanvasClient
from quizpush.canvas.config import CanvasOptions
from quizpush.canvas.executor import DELETE, GET, POST, PUT, CallResult, RemoteCallExecutor
from quizpush.canvas.grouping import GroupingStrategy, Pool
from quizpush.canvas.renderer import PayloadRenderer
from quizpush.canvas.time_limit import compute_time_limit
from quizpush.errors import ContentError, RemoteApiError
from quizpush.quiz.models import Question, Quiz


@dataclass
class SyncContext:
    """Mutable state for exactly one synchronization run."""

    course_id: str
    quiz_id: str | None
    dry_run: bool = False
    current_group_id: Any = None
    group_count: int = 0
    question_count: int = 0

    @property
    def quiz_path(self) -> str:
        return f"courses/{self.course_id}/quizzes/{self.quiz_id}"


@dataclass
class SyncResult:
    quiz_id: str
    new_quiz: bool
    question_count: int
    group_count: int
    dry_run: bool = False

    @property
    def summary(self) -> str:
        prefix = "New quiz" if self.new_quiz else "Existing quiz"
        return f"{prefix} {self.quiz_id} now has {self.question_count} questions in {self.group_count} pool(s)"


def validate_quiz(quiz: Quiz) -> None:
    """
    Reject quizzes the Canvas renderer cannot publish.

    An authored pool whose members carry different points is accepted: the
    group takes its points from the first member, and a warning is logged.

    Raises:
        ContentError: On unsupported question kinds
    """
    unsupported = quiz.unsupported_questions()
    if unsupported:
        kinds = sorted({q.kind.value for q in unsupported})
        raise ContentError(
            "Canvas renderer currently only supports Multiple Choice and Select All That Apply questions "
            f"(found: {', '.join(kinds)})"
        )

    for pool in GroupingStrategy().authored(quiz.grouped_questions):
        points = sorted({q.points for q in pool.members})
        if len(points) > 1:
            logger.warning(
                "Pool '{}' mixes point values {}; Canvas will score every pick as {}",
                pool.name,
                points,
                pool.question_points,
            )


def _created_id(result: CallResult, extract: Callable[[Any], Any]) -> Any:
    """Pull the new object's id out of a successful reply."""
    body = result.unwrap()
    try:
        return extract(body)
    except (KeyError, IndexError, TypeError) as e:
        raise RemoteApiError(f"{result.description} (unexpected response)", result.status, body) from e


class QuizSynchronizer:
    """
    Drives one quiz through replace-or-create, then populates its groups and questions.

    Without an injected executor, each synchronize() call opens its own
    CanvasClient and closes it when the run ends.
    """

    executor: RemoteCallExecutor

    def __init__(
        self,
        options: CanvasOptions,
        executor: RemoteCallExecutor | None = None,
        grouping: GroupingStrategy | None = None,
        renderer: PayloadRenderer | None = None,
    ) -> None:
        self.options = options
        self._owns_client = executor is None
        if executor is not None:
            self.executor = executor
        self.grouping = grouping or GroupingStrategy()
        self.renderer = renderer or PayloadRenderer()

    def time_limit_for(self, quiz: Quiz) -> int:
        return compute_time_limit(
            quiz.points,
            minutes_per_point=self.options.minutes_per_point,
            extra_minutes=self.options.extra_minutes,
        )

    def synchronize(self, quiz: Quiz) -> SyncResult:
        """
        Publish a quiz to Canvas.

        Args:
            quiz: The quiz to publish

        Returns:
            SyncResult with the quiz id and counters

        Raises:
            ContentError: Before any remote call, if the quiz cannot be published
            RemoteApiError: At the first failing remote call; earlier changes stay in place
        """
        validate_quiz(quiz)

        if not self._owns_client:
            return self._publish(quiz)

        client = CanvasClient.from_options(self.options)
        try:
            self.executor = RemoteCallExecutor(client, dry_run=self.options.dry_run)
            return self._publish(quiz)
        finally:
            client.close()

    def _publish(self, quiz: Quiz) -> SyncResult:
        ctx = SyncContext(
            course_id=self.options.course_id,
            quiz_id=self.options.quiz_id,
            dry_run=self.options.dry_run,
        )
        new_quiz = ctx.quiz_id is None

        logger.info(
            "Publishing '{}' ({} questions, {} points) to course {}, dry_run={}",
            quiz.title,
            len(quiz.questions),
            quiz.points,
            ctx.course_id,
            ctx.dry_run,
        )

        if new_quiz:
            self._create_quiz(ctx, quiz)
        else:
            self._truncate_quiz(ctx, quiz)

        for pool in self.grouping.partition(quiz.questions):
            self._start_group(ctx, pool)
            for question in pool.members:
                self._add_question(ctx, question)

        result = SyncResult(
            quiz_id=str(ctx.quiz_id),
            new_quiz=new_quiz,
            question_count=ctx.question_count,
            group_count=ctx.group_count,
            dry_run=ctx.dry_run,
        )
        logger.info(result.summary)
        return result

    # =========================================================================
    # Replace / Create
    # =========================================================================

    def _truncate_quiz(self, ctx: SyncContext, quiz: Quiz) -> None:
        """List, then remove, all questions and groups of the existing quiz."""
        path = ctx.quiz_path
        questions = self.executor.execute(f"Truncating quiz {ctx.quiz_id}", GET, f"{path}/questions").unwrap()
        if not isinstance(questions, list):
            raise RemoteApiError(f"Truncating quiz {ctx.quiz_id}", None, f"expected a list of questions, got {questions!r}")

        for q in questions:
            qid = q["id"]
            self.executor.execute(f"Delete question {qid}", DELETE, f"{path}/questions/{qid}").unwrap()

        # Groups must go too, in first-seen order
        group_ids: list[Any] = []
        for q in questions:
            gid = q.get("quiz_group_id")
            if gid is not None and gid not in group_ids:
                group_ids.append(gid)
        for gid in group_ids:
            self.executor.execute(f"Delete group {gid}", DELETE, f"{path}/groups/{gid}").unwrap()

        logger.info("Removed {} questions in {} groups from quiz {}", len(questions), len(group_ids), ctx.quiz_id)

        update = {"quiz": {"title": quiz.title, "time_limit": self.time_limit_for(quiz)}}
        self.executor.execute("Update quiz title and time limit", PUT, path, body=update).unwrap()

    def _create_quiz(self, ctx: SyncContext, quiz: Quiz) -> None:
        quiz_opts = {
            **self.options.quiz_options,
            "title": quiz.title,
            "time_limit": self.time_limit_for(quiz),
        }
        result = self.executor.execute(
            "Create quiz",
            POST,
            f"courses/{ctx.course_id}/quizzes",
            body={"quiz": quiz_opts},
            simulate=lambda sim_id: {"id": sim_id},
        )
        ctx.quiz_id = str(_created_id(result, lambda body: body["id"]))
        logger.info("Created new quiz {} in course {}", ctx.quiz_id, ctx.course_id)

    # =========================================================================
    # Populate
    # =========================================================================

    def _start_group(self, ctx: SyncContext, pool: Pool) -> None:
        group = pool.to_group_payload()
        result = self.executor.execute(
            f"Creating new group with {group}",
            POST,
            f"{ctx.quiz_path}/groups",
            body=group,
            simulate=lambda sim_id: {"quiz_groups": [{"id": sim_id}]},
        )
        ctx.current_group_id = _created_id(result, lambda body: body["quiz_groups"][0]["id"])
        ctx.group_count += 1

    def _add_question(self, ctx: SyncContext, question: Question) -> None:
        payload = self.renderer.render(question, ctx.current_group_id)
        self.executor.execute(
            f"Adding to group {ctx.current_group_id}",
            POST,
            f"{ctx.quiz_path}/questions",
            body=payload,
            simulate=lambda sim_id: {"id": sim_id},
        ).unwrap()
        ctx.question_count += 1


def synchronize(quiz: Quiz, options: CanvasOptions) -> SyncResult:
    """Publish a quiz with a fresh client; the client is closed afterwards."""
    return QuizSynchronizer(options).synchronize(quiz)
