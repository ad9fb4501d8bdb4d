"""
Unit tests for the remote call executor.

Uses httpx.MockTransport so no network is involved.
"""

import httpx
import pytest

from quizpush.canvas.client import CanvasClient
from quizpush.canvas.config import SIMULATED_ID_START
from quizpush.canvas.executor import CallResult, RemoteCallExecutor
from quizpush.errors import RemoteApiError
from tests.factories import API_BASE, FakeCanvas


def _executor(fake, dry_run=False):
    client = CanvasClient(API_BASE, "secret-token", transport=fake.transport)
    return RemoteCallExecutor(client, dry_run=dry_run)


class TestCallResult:
    """Tests for CallResult."""

    def test_unwrap_returns_body(self):
        assert CallResult("ok", body={"id": 1}).unwrap() == {"id": 1}

    def test_unwrap_raises_error(self):
        error = RemoteApiError("Create quiz", 500, "oops")
        result = CallResult("Create quiz", error=error)

        assert result.ok is False
        with pytest.raises(RemoteApiError) as exc_info:
            result.unwrap()
        assert exc_info.value is error


class TestLiveCalls:
    """Tests for calls that are actually sent."""

    def test_get_returns_parsed_body(self):
        fake = FakeCanvas(existing_questions=[{"id": 1, "quiz_group_id": 9}])
        result = _executor(fake).execute("List", "GET", "courses/1/quizzes/2/questions")

        assert result.ok
        assert result.body == [{"id": 1, "quiz_group_id": 9}]
        assert fake.calls == [("GET", "courses/1/quizzes/2/questions", None)]

    def test_post_sends_json_and_returns_body(self):
        fake = FakeCanvas()
        result = _executor(fake).execute("Create quiz", "POST", "courses/1/quizzes", body={"quiz": {"title": "T"}})

        assert result.body == {"id": 501}
        assert result.status == 200
        assert fake.calls == [("POST", "courses/1/quizzes", {"quiz": {"title": "T"}})]

    @pytest.mark.parametrize("verb", ["PUT", "DELETE"])
    def test_put_and_delete_return_nothing(self, verb):
        result = _executor(FakeCanvas()).execute("Change", verb, "courses/1/quizzes/2")
        assert result.ok
        assert result.body is None
        assert result.status in (200, 204)

    def test_sends_bearer_token(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["url"] = str(request.url)
            return httpx.Response(200, json=[])

        client = CanvasClient(API_BASE, "secret-token", transport=httpx.MockTransport(handler))
        RemoteCallExecutor(client).execute("List", "GET", "courses/1/quizzes/2/questions")

        assert seen["auth"] == "Bearer secret-token"
        assert seen["url"] == f"{API_BASE}/courses/1/quizzes/2/questions"


class TestErrorTranslation:
    """Tests for non-success statuses and transport failures."""

    def test_non_success_status_becomes_remote_api_error(self):
        fake = FakeCanvas(fail_on={("POST", "/groups"): 403})
        result = _executor(fake).execute("Creating new group", "POST", "courses/1/quizzes/2/groups", body={})

        assert not result.ok
        assert result.error.status == 403
        assert result.error.description == "Creating new group"
        assert "boom" in result.error.body
        assert str(result.error).startswith("Creating new group: 403 ")

    def test_transport_error_becomes_remote_api_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = CanvasClient(API_BASE, "secret-token", transport=httpx.MockTransport(handler))
        result = RemoteCallExecutor(client).execute("List", "GET", "courses/1/quizzes/2/questions")

        assert result.error.status is None
        assert "timed out" in result.error.body

    def test_no_retry(self):
        fake = FakeCanvas(fail_on={("DELETE", "/questions/5"): 500})
        _executor(fake).execute("Delete question 5", "DELETE", "courses/1/quizzes/2/questions/5")
        assert len(fake.calls) == 1


class TestDryRun:
    """Tests for dry-run gating."""

    @pytest.mark.parametrize("verb", ["POST", "PUT", "DELETE"])
    def test_mutating_calls_are_not_sent(self, verb):
        fake = FakeCanvas()
        executor = _executor(fake, dry_run=True)
        result = executor.execute("Change", verb, "courses/1/quizzes/2", body={"x": 1})

        assert fake.calls == []
        assert result.simulated
        assert result.ok
        assert executor.calls_skipped == 1

    def test_reads_are_still_sent(self):
        fake = FakeCanvas(existing_questions=[{"id": 3}])
        result = _executor(fake, dry_run=True).execute("List", "GET", "courses/1/quizzes/2/questions")

        assert result.body == [{"id": 3}]
        assert not result.simulated
        assert len(fake.calls) == 1

    def test_reads_still_fail_in_dry_run(self):
        fake = FakeCanvas(fail_on={("GET", "/questions"): 404})
        result = _executor(fake, dry_run=True).execute("Truncating quiz 2", "GET", "courses/1/quizzes/2/questions")
        assert result.error.status == 404

    def test_simulated_ids_are_distinct(self):
        executor = _executor(FakeCanvas(), dry_run=True)
        ids = [
            executor.execute("Group", "POST", "g", simulate=lambda sim_id: {"id": sim_id}).body["id"]
            for _ in range(3)
        ]
        assert ids == [SIMULATED_ID_START, SIMULATED_ID_START + 1, SIMULATED_ID_START + 2]

    def test_simulate_not_called_when_live(self):
        calls = []
        _executor(FakeCanvas()).execute("Group", "POST", "g", simulate=lambda sim_id: calls.append(sim_id))
        assert calls == []
