"""Tests for the HTTP routes."""

import pytest
from fastapi.testclient import TestClient

from assistant.core.errors import IterationLimitError, LLMProviderError
from assistant.main import app
from assistant.models.common import SessionRecord, TurnOutcome
from assistant.services.context_builder import SessionContext
from conftest import assistant_reply


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def run_turn(mocker):
    return mocker.patch("assistant.api.v1.endpoints.chat.run_turn", new_callable=mocker.AsyncMock,
                        return_value=TurnOutcome(response="Hej!", should_save_insight=False,
                                                 tool_calls_used=2, timestamp="2026-10-19T12:30:00+00:00"))


@pytest.fixture
def sessions(mocker):
    manager = mocker.patch("assistant.api.v1.endpoints.session.session_manager")
    manager.save_session = mocker.AsyncMock()
    manager.get_session = mocker.AsyncMock(return_value=None)
    return manager


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "alive" in response.json()["message"]


class TestChat:

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"message": None}])
    def test_blank_message_is_400(self, client, run_turn, body):
        response = client.post("/v1/chat/", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert run_turn.await_count == 0

    def test_blank_message_never_reaches_provider(self, client, mocker):
        llm = mocker.patch("assistant.core.orchestrator.call_llm", new_callable=mocker.AsyncMock)

        response = client.post("/v1/chat/", json={"message": " "})

        assert response.status_code == 400
        assert llm.await_count == 0

    def test_success_uses_camel_case(self, client, run_turn):
        response = client.post("/v1/chat/", json={"message": "Hej"})

        assert response.status_code == 200
        assert response.json() == {
            "response": "Hej!",
            "shouldSaveInsight": False,
            "toolCallsUsed": 2,
            "timestamp": "2026-10-19T12:30:00+00:00",
        }

    def test_request_fields_are_forwarded(self, client, run_turn):
        client.post("/v1/chat/", json={
            "message": "Hej",
            "context": "Likes discgolf.",
            "sessionId": "sess-1",
            "history": [{"role": "user", "content": "Earlier"}, {"role": "assistant", "content": "Reply"}],
        })

        kwargs = run_turn.await_args.kwargs
        assert kwargs["user_message"] == "Hej"
        assert kwargs["context"] == "Likes discgolf."
        assert kwargs["session_id"] == "sess-1"
        assert [m.role for m in kwargs["history"]] == ["user", "assistant"]

    @pytest.mark.parametrize("error", [
        LLMProviderError("LLM provider error", status_code=401, detail="invalid key"),
        IterationLimitError(5, 5),
    ])
    def test_turn_failure_is_500(self, client, run_turn, error):
        run_turn.side_effect = error

        response = client.post("/v1/chat/", json={"message": "Hej"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process chat", "details": str(error)}

    def test_malformed_body_is_400(self, client, run_turn):
        response = client.post("/v1/chat/", json={"message": "Hej", "history": "not a list"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_full_turn_without_tools(self, client, mocker):
        mocker.patch("assistant.core.orchestrator.call_llm", new_callable=mocker.AsyncMock,
                     return_value=assistant_reply("The deadline is Friday."))

        response = client.post("/v1/chat/", json={"message": "When is it due?"})

        body = response.json()
        assert response.status_code == 200
        assert body["response"] == "The deadline is Friday."
        assert body["shouldSaveInsight"] is True
        assert body["toolCallsUsed"] == 0


class TestSessionRoutes:

    def test_new_session(self, client, sessions, mocker):
        build = mocker.patch("assistant.api.v1.endpoints.session.build_session_context", new_callable=mocker.AsyncMock,
                             return_value=SessionContext(text="# Full context", breakdown={"profile": "No data"},
                                                         token_estimate=4))

        response = client.post("/v1/session/new")

        body = response.json()
        assert response.status_code == 200
        assert body["context"] == "# Full context"
        assert body["contextBreakdown"] == {"profile": "No data"}
        assert body["tokenEstimate"] == 4
        saved = sessions.save_session.await_args.args[0]
        assert saved.session_id == body["sessionId"]
        assert saved.status == "active"
        assert build.await_args.kwargs == {"sessions": sessions}

    @pytest.mark.parametrize("path", ["/v1/session/save", "/v1/session/end"])
    @pytest.mark.parametrize("body", [{}, {"sessionId": "s1"}, {"messages": []}])
    def test_missing_fields_are_400(self, client, sessions, path, body):
        response = client.post(path, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "sessionId and messages are required"}

    def test_save_counts_messages_and_tool_calls(self, client, sessions):
        sessions.get_session.return_value = SessionRecord(session_id="s1", started_at="2026-10-19T12:00:00+00:00")

        response = client.post("/v1/session/save", json={
            "sessionId": "s1",
            "messages": [
                {"role": "user", "content": "Todos?"},
                {"role": "assistant", "tool_calls": [
                    {"id": "c1", "type": "function", "function": {"name": "get_todos", "arguments": "{}"}},
                    {"id": "c2", "type": "function", "function": {"name": "get_health_today", "arguments": "{}"}},
                ]},
                {"role": "tool", "tool_call_id": "c1", "content": "{}"},
                {"role": "tool", "tool_call_id": "c2", "content": "{}"},
                {"role": "assistant", "content": "Two todos."},
            ],
        })

        assert response.status_code == 200
        assert response.json() == {"sessionId": "s1", "messageCount": 5, "toolCallsCount": 2}
        saved = sessions.save_session.await_args.args[0]
        assert saved.started_at == "2026-10-19T12:00:00+00:00"

    def test_end_submits_task(self, client, sessions, mocker):
        task = mocker.patch("assistant.api.v1.endpoints.session.end_session_task")
        task.delay.return_value.id = "task-123"

        response = client.post("/v1/session/end", json={
            "sessionId": "s1",
            "messages": [{"role": "user", "content": "Bye"}],
        })

        assert response.status_code == 200
        assert response.json() == {"sessionId": "s1", "taskId": "task-123", "status": "PENDING"}
        task.delay.assert_called_once_with("s1", [{"role": "user", "content": "Bye"}])

    def test_get_unknown_session_is_404(self, client, sessions):
        assert client.get("/v1/session/nope").status_code == 404

    def test_get_session(self, client, sessions):
        sessions.get_session.return_value = SessionRecord(session_id="s1", started_at="2026-10-19T12:00:00+00:00")

        response = client.get("/v1/session/s1")

        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"] == "s1"
        assert body["messageCount"] == 0
        assert body["startedAt"] == "2026-10-19T12:00:00+00:00"
        assert body["status"] == "active"
        assert "session_id" not in body


class TestTaskStatus:

    def test_finished_task(self, client, mocker):
        result = mocker.patch("assistant.api.v1.endpoints.tasks.AsyncResult").return_value
        result.ready.return_value = True
        result.successful.return_value = True
        result.state = "SUCCESS"
        result.get.return_value = {"sessionId": "s1", "insightsSaved": 1}

        response = client.get("/v1/tasks/status/task-123")

        assert response.json() == {
            "taskId": "task-123",
            "status": "SUCCESS",
            "result": {"sessionId": "s1", "insightsSaved": 1},
        }

    def test_pending_task(self, client, mocker):
        result = mocker.patch("assistant.api.v1.endpoints.tasks.AsyncResult").return_value
        result.ready.return_value = False
        result.state = "PENDING"

        response = client.get("/v1/tasks/status/task-123")

        assert response.json() == {"taskId": "task-123", "status": "PENDING", "result": None}
