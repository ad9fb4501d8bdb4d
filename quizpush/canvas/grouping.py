"""
Question pool partitioning.

Canvas question groups require every member to carry the same point value.
Ungrouped questions go into synthetic "pick all" pools, one per point value,
so they are shown in shuffled order without being sampled. Authored pools
become "pick 1" groups.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from quizpush.quiz.models import Question

UNPOOLED_PREFIX = "unpooled"
AUTHORED_PREFIX = "Group"


@dataclass
class Pool:
    """An ordered bucket of same-point questions that becomes one remote group."""

    name: str
    pick_count: int
    question_points: int
    members: list[Question] = field(default_factory=list)

    def to_group_payload(self) -> dict:
        return {
            "quiz_groups": [
                {
                    "name": self.name,
                    "pick_count": self.pick_count,
                    "question_points": self.question_points,
                }
            ]
        }


class GroupingStrategy:
    """Partitions a question sequence into synthetic pools followed by authored pools."""

    def partition(self, questions: Sequence[Question]) -> list[Pool]:
        ungrouped = [q for q in questions if q.group_key is None]
        grouped = [q for q in questions if q.group_key is not None]
        return self.unpooled(ungrouped) + self.authored(grouped)

    def unpooled(self, questions: Sequence[Question]) -> list[Pool]:
        by_points: dict[int, list[Question]] = {}
        for q in questions:
            by_points.setdefault(q.points, []).append(q)

        return [
            Pool(
                name=f"{UNPOOLED_PREFIX}:{points}",
                pick_count=len(members),
                question_points=points,
                members=members,
            )
            for points, members in by_points.items()
        ]

    def authored(self, questions: Sequence[Question]) -> list[Pool]:
        # A key that reappears after another key opens a second pool with the same name
        pools: list[Pool] = []
        current: Pool | None = None
        current_key: str | None = None
        for q in questions:
            if current is None or q.group_key != current_key:
                current = Pool(
                    name=f"{AUTHORED_PREFIX}:{q.group_key}",
                    pick_count=1,
                    question_points=q.points,
                )
                current_key = q.group_key
                pools.append(current)
            current.members.append(q)
        return pools
