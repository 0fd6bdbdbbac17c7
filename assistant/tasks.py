# assistant/tasks.py
# Background tasks run by the Celery worker.
# Date: 2026-10-19
# Version: 0.2.0

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4
from assistant.worker import celery_app
from assistant.models.common import Message, SessionRecord
from assistant.services.backend_client import BackendClient, backend_client
from assistant.services.session_analyzer import analyze_conversation
from assistant.services.session_manager import SessionManager
from assistant.utils.logger import console


async def _save_insights(client: BackendClient, session_id: str, insights: List[str],
                         importance: int, day: str) -> int:
    """Best-effort: each insight is posted on its own; returns how many were accepted."""
    saved = 0
    for insight in insights:
        result = await client.try_request(
            "POST", "/api/save-insight",
            json={
                "insight": insight,
                "section": f"conversation_{day}_{uuid4().hex[:9]}",
                "importance": importance,
            },
            session_id=session_id,
        )
        if result is not None:
            saved += 1
    return saved


async def end_session(session_id: str, messages: List[Message],
                      manager: SessionManager,
                      client: BackendClient,
                      now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Analyses the conversation, stores the completed session record and files the
    insights the analysis found.
    """
    now = now or datetime.now(timezone.utc)
    timestamp = now.isoformat()

    record = await manager.get_session(session_id)
    if record is None:
        record = SessionRecord(session_id=session_id, started_at=timestamp)

    analysis = await analyze_conversation(messages)
    record = record.with_messages(messages, timestamp).model_copy(update={
        "status": "completed",
        "summary": analysis.summary,
        "topics": analysis.topics,
        "importance": analysis.importance,
        "ended_at": timestamp,
    })
    await manager.save_session(record)

    insights_saved = await _save_insights(
        client, session_id, analysis.insights, analysis.importance, now.date().isoformat()
    )
    return {
        "sessionId": session_id,
        "summary": analysis.summary,
        "topics": analysis.topics,
        "importance": analysis.importance,
        "insightsSaved": insights_saved,
    }


async def _async_end_session(session_id: str, messages: List[Message]) -> Dict[str, Any]:
    # The Redis client is bound to the event loop, so each task run opens its own.
    manager = SessionManager()
    try:
        return await end_session(session_id, messages, manager, backend_client)
    finally:
        await manager.close()


@celery_app.task(name="assistant.tasks.end_session_task")
def end_session_task(session_id: str, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    A Celery task that summarises and closes a session.
    The async workflow runs inside a single asyncio.run() call.
    """
    console.info(f"[Celery Task {end_session_task.request.id}] Ending session '{session_id}'.")

    try:
        parsed = [Message.model_validate(message) for message in messages]
        result = asyncio.run(_async_end_session(session_id, parsed))
        console.success(f"[Celery Task {end_session_task.request.id}] Completed successfully.")
        return result
    except Exception:
        console.exception(f"[Celery Task {end_session_task.request.id}] Failed.")
        raise
