"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402
from quizpush.canvas.config import CanvasOptions  # noqa: E402
from quizpush.quiz.models import Quiz  # noqa: E402
from tests.factories import API_BASE, FakeCanvas, make_question  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fake_canvas():
    return FakeCanvas()


@pytest.fixture
def empty_settings():
    """Settings that ignore the real environment and .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def canvas_options():
    """Options for creating a new quiz."""
    return CanvasOptions(
        api_base=API_BASE,
        auth_token="secret-token",
        course_id="99999",
    )


@pytest.fixture
def sample_quiz():
    """
    Quiz with two ungrouped point values and two authored pools.

    Pools: unpooled:1 (2 questions), unpooled:2 (1), Group:ch1 (2), Group:ch2 (1)
    """
    return Quiz(
        title="Midterm 1",
        questions=[
            make_question("Q1", points=1),
            make_question("Q2", points=2),
            make_question("Q3", points=1, multiple=True),
            make_question("Q4", points=3, pool="ch1"),
            make_question("Q5", points=3, pool="ch1"),
            make_question("Q6", points=2, pool="ch2", raw=True),
        ],
    )
