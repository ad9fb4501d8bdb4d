"""
Typer CLI for quizpush.

Commands:
    quizpush publish QUIZ_FILE   - Publish a quiz to Canvas (create or replace)
    quizpush check QUIZ_FILE     - Validate a quiz and show the pools it would create
    quizpush version             - Show version information

Usage:
    quizpush --help
    quizpush publish midterm.yml --config canvas.yml
    quizpush publish midterm.yml --config canvas.yml --dry-run
    quizpush check midterm.yml
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import get_settings
from quizpush import __version__
from quizpush.canvas.config import DEFAULT_EXTRA_MINUTES, DEFAULT_MINUTES_PER_POINT, load_canvas_options
from quizpush.canvas.grouping import GroupingStrategy
from quizpush.canvas.synchronizer import synchronize, validate_quiz
from quizpush.canvas.time_limit import compute_time_limit
from quizpush.errors import QuizPushError
from quizpush.quiz.loader import load_quiz

app = typer.Typer(
    help="quizpush CLI: local quiz files -> Canvas LMS quizzes",
    no_args_is_help=True,
)

console = Console()


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Route loguru output to stderr and, optionally, a rotating file."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<level>{level: <8}</level> {message}",
    )
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", retention=5)


def _fail(error: QuizPushError) -> None:
    rprint(f"[red]✗[/red] {escape(str(error))}")
    raise typer.Exit(code=1)


# ========================================
# COMMANDS
# ========================================


@app.command("publish")
def publish(
    quiz_file: Path = typer.Argument(..., help="Quiz file (.yml, .yaml or .json)"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML file with canvas/quiz sections"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Do all read calls but change nothing in Canvas"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """
    Publish a quiz to Canvas.

    Creates a new quiz, or replaces every question of the quiz given by quiz_id.
    """
    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_file)

    try:
        options = load_canvas_options(config_file, dry_run=dry_run, settings=settings)
        quiz = load_quiz(quiz_file)
        result = synchronize(quiz, options)
    except QuizPushError as e:
        _fail(e)
        return

    marker = "[yellow]DRY RUN[/yellow] " if result.dry_run else ""
    rprint(f"\n[green]✓[/green] {marker}{result.summary}")
    rprint(f"  Quiz id: {result.quiz_id}")


@app.command("check")
def check(
    quiz_file: Path = typer.Argument(..., help="Quiz file (.yml, .yaml or .json)"),
    minutes_per_point: int = typer.Option(DEFAULT_MINUTES_PER_POINT, "--minutes-per-point", min=1),
    extra_minutes: int = typer.Option(DEFAULT_EXTRA_MINUTES, "--extra-minutes", min=0),
) -> None:
    """
    Validate a quiz file and show the Canvas groups it would produce.

    Unsupported question kinds fail the check. A pool that mixes point
    values only warns: its group scores every pick at the first question's points.

    No remote call is made.
    """
    configure_logging("WARNING")

    try:
        quiz = load_quiz(quiz_file)
        validate_quiz(quiz)
    except QuizPushError as e:
        _fail(e)
        return

    pools = GroupingStrategy().partition(quiz.questions)

    table = Table(title=quiz.title)
    table.add_column("Group", style="cyan")
    table.add_column("Pick", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Questions", justify="right")
    for pool in pools:
        table.add_row(pool.name, str(pool.pick_count), str(pool.question_points), str(len(pool.members)))
    console.print(table)

    time_limit = compute_time_limit(quiz.points, minutes_per_point, extra_minutes)
    rprint(f"[green]✓[/green] {len(quiz.questions)} questions in {len(pools)} pool(s), {quiz.points} points")
    rprint(f"  Time limit: {time_limit} minutes")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    rprint(f"[bold]quizpush[/bold] v{__version__}")
    rprint("  Local quiz files -> Canvas LMS")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
