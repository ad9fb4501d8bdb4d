"""
Unit tests for quiz time limit derivation.
"""

import pytest

from quizpush.canvas.time_limit import compute_time_limit


class TestComputeTimeLimit:
    """Tests for compute_time_limit."""

    def test_rounds_up_to_next_multiple_of_five(self):
        """10 points at 2 min/point plus 5 extra is 25, which rounds to 30."""
        assert compute_time_limit(10, minutes_per_point=2, extra_minutes=5) == 30

    def test_exact_multiple_still_rounds_up(self):
        """20 minutes is already a multiple of 5 but still gains 5."""
        assert compute_time_limit(20, minutes_per_point=1, extra_minutes=0) == 25

    def test_defaults(self):
        """Default is 1 minute per point plus 5 extra minutes."""
        # 7 + 5 = 12 -> 15
        assert compute_time_limit(7) == 15

    def test_zero_points(self):
        """An empty quiz still gets a positive time limit."""
        assert compute_time_limit(0) == 10
        assert compute_time_limit(0, extra_minutes=0) == 5

    @pytest.mark.parametrize("points,per_point,extra,expected", [
        (1, 1, 0, 5),
        (4, 1, 0, 5),
        (5, 1, 0, 10),
        (6, 1, 0, 10),
        (12, 3, 2, 40),
    ])
    def test_result_is_positive_multiple_of_five(self, points, per_point, extra, expected):
        """Results are always positive multiples of 5 above the raw total."""
        result = compute_time_limit(points, per_point, extra)
        assert result == expected
        assert result % 5 == 0
        assert result > points * per_point + extra
