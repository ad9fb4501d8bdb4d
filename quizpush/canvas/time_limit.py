"""Quiz time limit derivation."""

from __future__ import annotations

from loguru import logger

from quizpush.canvas.config import (
    DEFAULT_EXTRA_MINUTES,
    DEFAULT_MINUTES_PER_POINT,
    TIME_LIMIT_GRANULARITY,
)


def compute_time_limit(
    total_points: int | float,
    minutes_per_point: int = DEFAULT_MINUTES_PER_POINT,
    extra_minutes: int = DEFAULT_EXTRA_MINUTES,
) -> int:
    """
    Minutes allowed for a quiz worth total_points.

    points * minutes_per_point + extra_minutes, rounded up to the next multiple
    of 5. An exact multiple still gains 5 minutes (20 -> 25).
    """
    limit = int(total_points) * minutes_per_point + extra_minutes
    limit += TIME_LIMIT_GRANULARITY - (limit % TIME_LIMIT_GRANULARITY)
    logger.info("Time limit {} based on {} points", limit, total_points)
    return limit
