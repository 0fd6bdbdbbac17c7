"""Tests for session start context, storage, analysis and the end-of-session workflow."""

import asyncio
import json
import re

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from assistant.core.errors import LLMProviderError
from assistant.models.common import Message, SessionAnalysis, SessionRecord
from assistant.services.context_builder import build_session_context, estimate_tokens
from assistant.services.session_analyzer import (
    analyze_conversation,
    fallback_analysis,
    parse_analysis,
    render_transcript,
)
from assistant.services.session_manager import SessionManager
from assistant.tasks import end_session
from conftest import RecordingBackend, assistant_reply, assistant_requesting, tool_call

CONVERSATION = [
    Message(role="user", content="Remind me about the Halloween deadline"),
    assistant_requesting(tool_call("c1", "get_todos")),
    Message(role="tool", tool_call_id="c1", name="get_todos", content="{\"success\": true}"),
    Message(role="assistant", content="The Halloween party deadline is on the 31st."),
]


class TestSessionAnalyzer:

    def test_transcript_skips_tool_traffic(self):
        assert render_transcript(CONVERSATION) == (
            "User: Remind me about the Halloween deadline\n\n"
            "Assistant: The Halloween party deadline is on the 31st."
        )

    def test_parse_json_inside_prose(self):
        text = 'Sure! {"summary": "Planning", "topics": ["halloween"], "importance": 4, "insights": ["Party on 31st"]} Done.'
        analysis = parse_analysis(text)
        assert analysis == SessionAnalysis(summary="Planning", topics=["halloween"], importance=4,
                                           insights=["Party on 31st"])

    def test_parse_truncates_and_clamps(self):
        text = json.dumps({
            "summary": "Busy",
            "topics": ["a", "b", "c", "d", "e", "f", "g"],
            "importance": 9,
            "insights": ["1", "2", "3", "4"],
        })
        analysis = parse_analysis(text)
        assert analysis.topics == ["a", "b", "c", "d", "e"]
        assert analysis.insights == ["1", "2", "3"]
        assert analysis.importance == 5

    @pytest.mark.parametrize("text", ["no json here", "{not valid}", '{"topics": []}', ""])
    def test_parse_rejects_unusable_replies(self, text):
        with pytest.raises(ValueError):
            parse_analysis(text)

    def test_fallback_counts_messages(self):
        assert fallback_analysis(CONVERSATION).summary == "Conversation with 4 messages"
        assert fallback_analysis(CONVERSATION).importance == 3

    def test_analyze_uses_low_temperature(self, mocker):
        llm = mocker.patch("assistant.services.session_analyzer.call_llm", new_callable=mocker.AsyncMock)
        llm.return_value = assistant_reply('{"summary": "Party planning", "importance": 2}')

        analysis = asyncio.run(analyze_conversation(CONVERSATION))

        assert analysis.summary == "Party planning"
        assert llm.await_args.kwargs == {"temperature": 0.3, "max_tokens": 1000}

    def test_analyze_falls_back_on_provider_error(self, mocker):
        mocker.patch("assistant.services.session_analyzer.call_llm",
                     new_callable=mocker.AsyncMock, side_effect=LLMProviderError("down"))

        analysis = asyncio.run(analyze_conversation(CONVERSATION))

        assert analysis.summary == "Conversation with 4 messages"

    def test_analyze_falls_back_on_bad_reply(self, mocker):
        mocker.patch("assistant.services.session_analyzer.call_llm",
                     new_callable=mocker.AsyncMock, return_value=assistant_reply("I cannot summarise that."))

        analysis = asyncio.run(analyze_conversation(CONVERSATION))

        assert analysis.insights == []
        assert analysis.summary.startswith("Conversation with")


class TestContextBuilder:

    def test_all_layers_present(self, fixed_now):
        backend = RecordingBackend(routes={
            "/api/user-context-summary": {"success": True, "summary": "Lives in Göteborg."},
            "/api/health-today": {"success": True, "health": {"mood_score": 7, "energy_level": 5, "notes": "Slept well"}},
        })

        context = asyncio.run(build_session_context(backend.client(), fixed_now))

        assert context.text.startswith("# Full context\n\n**Date:** måndag 19 oktober 2026")
        assert "## User context\n\nLives in Göteborg." in context.text
        assert "- Mood: 7/10\n- Energy: 5/10\n- Notes: Slept well" in context.text
        assert "Stress" not in context.text
        assert context.breakdown == {"profile": "Data exists", "recentSessions": "No data", "health": "Data exists"}
        assert context.token_estimate == estimate_tokens(context.text)

    def test_failing_layers_are_skipped(self, fixed_now):
        backend = RecordingBackend(routes={
            "/api/user-context-summary": httpx.Response(500, text="down"),
            "/api/health-today": {"success": False},
        })

        context = asyncio.run(build_session_context(backend.client(), fixed_now))

        assert "##" not in context.text
        assert context.breakdown == {"profile": "No data", "recentSessions": "No data", "health": "No data"}

    def test_recent_sessions_layer(self, fixed_now, mocker):
        sessions = mocker.AsyncMock()
        sessions.get_recent_completed.return_value = [
            SessionRecord(session_id="b", status="completed", started_at="2026-10-18T18:00:00+00:00",
                          summary="Planned the party.", topics=["halloween", "candy"]),
            SessionRecord(session_id="a", status="completed", started_at="2026-10-17T07:15:00+00:00",
                          summary="Went through the budget."),
        ]

        context = asyncio.run(build_session_context(RecordingBackend().client(), fixed_now, sessions=sessions))

        assert (
            "## Recent conversations\n\n"
            "### 18 okt 20:00\nPlanned the party.\n*Topics: halloween, candy*\n\n"
            "### 17 okt 09:15\nWent through the budget.\n"
        ) in context.text
        assert context.breakdown["recentSessions"] == "2 sessions"
        sessions.get_recent_completed.assert_awaited_once_with(3)

    def test_recent_sessions_store_failure_is_skipped(self, fixed_now, mocker):
        sessions = mocker.AsyncMock()
        sessions.get_recent_completed.side_effect = RedisConnectionError("refused")

        context = asyncio.run(build_session_context(RecordingBackend().client(), fixed_now, sessions=sessions))

        assert "Recent conversations" not in context.text
        assert context.breakdown["recentSessions"] == "No data"

    def test_estimate_tokens_rounds_up(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2


class TestSessionManager:

    @pytest.fixture
    def redis(self, mocker):
        return mocker.AsyncMock()

    def test_save_uses_key_and_ttl(self, redis):
        manager = SessionManager(redis_client=redis)
        record = SessionRecord(session_id="s1", started_at="2026-10-19T12:30:00+00:00")

        asyncio.run(manager.save_session(record))

        key, value = redis.set.await_args.args
        assert key == "session:s1"
        assert SessionRecord.model_validate_json(value) == record
        assert redis.set.await_args.kwargs == {"ex": 86400}

    def test_get_round_trips_record(self, redis):
        record = SessionRecord(session_id="s1", started_at="2026-10-19T12:30:00+00:00").with_messages(
            CONVERSATION, "2026-10-19T12:40:00+00:00")
        redis.get.return_value = record.model_dump_json()

        loaded = asyncio.run(SessionManager(redis_client=redis).get_session("s1"))

        assert loaded == record
        assert loaded.message_count == 4
        assert loaded.tool_calls_count == 1

    def test_get_unknown_session(self, redis):
        redis.get.return_value = None
        assert asyncio.run(SessionManager(redis_client=redis).get_session("nope")) is None

    def test_save_propagates_store_failure(self, redis):
        redis.set.side_effect = RedisConnectionError("refused")
        record = SessionRecord(session_id="s1", started_at="now")

        with pytest.raises(RedisConnectionError):
            asyncio.run(SessionManager(redis_client=redis).save_session(record))

    def test_active_session_is_not_indexed(self, redis):
        record = SessionRecord(session_id="s1", started_at="2026-10-19T12:30:00+00:00")

        asyncio.run(SessionManager(redis_client=redis).save_session(record))

        assert redis.zadd.await_count == 0

    def test_completed_session_is_indexed_by_start(self, redis, fixed_now):
        record = SessionRecord(session_id="s1", status="completed", started_at=fixed_now.isoformat(),
                               summary="Done")

        asyncio.run(SessionManager(redis_client=redis).save_session(record))

        assert redis.set.await_args.kwargs == {"ex": 2592000}
        redis.zadd.assert_awaited_once_with("sessions:completed", {"s1": fixed_now.timestamp()})

    def test_recent_completed_skips_expired_and_unsummarised(self, redis):
        newest = SessionRecord(session_id="s3", status="completed", started_at="2026-10-19T10:00:00+00:00",
                               summary="Newest")
        bare = SessionRecord(session_id="s2", status="completed", started_at="2026-10-18T10:00:00+00:00")
        redis.zrevrange.return_value = ["s3", "gone", "s2"]
        redis.mget.return_value = [newest.model_dump_json(), None, bare.model_dump_json()]

        records = asyncio.run(SessionManager(redis_client=redis).get_recent_completed(3))

        assert records == [newest]
        redis.zrevrange.assert_awaited_once_with("sessions:completed", 0, 2)
        redis.mget.assert_awaited_once_with(["session:s3", "session:gone", "session:s2"])
        redis.zrem.assert_awaited_once_with("sessions:completed", "gone")

    def test_recent_completed_with_empty_index(self, redis):
        redis.zrevrange.return_value = []

        assert asyncio.run(SessionManager(redis_client=redis).get_recent_completed()) == []
        assert redis.mget.await_count == 0


class TestEndSession:

    @pytest.fixture
    def manager(self, mocker):
        manager = mocker.AsyncMock()
        manager.get_session.return_value = SessionRecord(
            session_id="s1", started_at="2026-10-19T12:00:00+00:00")
        return manager

    @pytest.fixture
    def analysis(self, mocker):
        return mocker.patch("assistant.tasks.analyze_conversation", new_callable=mocker.AsyncMock,
                            return_value=SessionAnalysis(summary="Party planning", topics=["halloween"],
                                                         importance=4, insights=["Party on 31st", "Buy candy"]))

    def test_completes_record_and_saves_insights(self, manager, analysis, fixed_now):
        backend = RecordingBackend()

        result = asyncio.run(end_session("s1", CONVERSATION, manager, backend.client(), now=fixed_now))

        assert result == {
            "sessionId": "s1",
            "summary": "Party planning",
            "topics": ["halloween"],
            "importance": 4,
            "insightsSaved": 2,
        }
        saved = manager.save_session.await_args.args[0]
        assert saved.status == "completed"
        assert saved.started_at == "2026-10-19T12:00:00+00:00"
        assert saved.ended_at == "2026-10-19T12:30:00+00:00"
        assert saved.message_count == 4
        assert saved.tool_calls_count == 1

        bodies = backend.json_bodies()
        assert [body["insight"] for body in bodies] == ["Party on 31st", "Buy candy"]
        assert all(re.fullmatch(r"conversation_2026-10-19_[0-9a-f]{9}", body["section"]) for body in bodies)
        assert all(request.headers["x-session-id"] == "s1" for request in backend.requests)

    def test_failed_insight_is_not_counted(self, manager, analysis, fixed_now):
        calls = []

        def flaky(request):
            calls.append(request)
            return httpx.Response(500 if len(calls) == 1 else 200, json={"success": True})

        from assistant.services.backend_client import BackendClient
        client = BackendClient("http://backend.test", "k", transport=httpx.MockTransport(flaky))

        result = asyncio.run(end_session("s1", CONVERSATION, manager, client, now=fixed_now))

        assert result["insightsSaved"] == 1
        assert len(calls) == 2

    def test_unknown_session_gets_new_record(self, manager, analysis, fixed_now):
        manager.get_session.return_value = None

        asyncio.run(end_session("fresh", CONVERSATION, manager, RecordingBackend().client(), now=fixed_now))

        saved = manager.save_session.await_args.args[0]
        assert saved.session_id == "fresh"
        assert saved.started_at == "2026-10-19T12:30:00+00:00"
