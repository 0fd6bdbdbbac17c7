# The module is to define the API endpoints for session management.
# Date: 2026-10-19
# Version: 0.2.0

from datetime import datetime, timezone
from uuid import uuid4
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from assistant.models.api_models import (
    EndSessionResponse,
    NewSessionResponse,
    SaveSessionResponse,
    SessionMessagesRequest,
)
from assistant.models.common import SessionRecord
from assistant.services.backend_client import backend_client
from assistant.services.context_builder import build_session_context
from assistant.services.session_manager import session_manager
from assistant.tasks import end_session_task
from assistant.utils.logger import console

router = APIRouter()


def get_new_session_id() -> str:
    """Generates a new, unique session ID."""
    return str(uuid4())


def _missing_fields_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "sessionId and messages are required"})


@router.post("/new",
          response_model=NewSessionResponse)
async def create_new_session():
    """
    Initializes a new session, stores it as active and returns its startup context.
    """
    now = datetime.now(timezone.utc)
    session_id = get_new_session_id()
    await session_manager.save_session(SessionRecord(session_id=session_id, started_at=now.isoformat()))

    context = await build_session_context(backend_client, now, sessions=session_manager)
    console.info(f"New session created: {session_id}")
    return NewSessionResponse(
        session_id=session_id,
        context=context.text,
        context_breakdown=context.breakdown,
        token_estimate=context.token_estimate,
        message="New session created successfully.",
    )


@router.post("/save",
          response_model=SaveSessionResponse)
async def save_session(request: SessionMessagesRequest):
    """
    Saves the caller's current message list for a session (auto-save during a conversation).
    """
    if not request.session_id or request.messages is None:
        return _missing_fields_response()

    now = datetime.now(timezone.utc).isoformat()
    record = await session_manager.get_session(request.session_id)
    if record is None:
        record = SessionRecord(session_id=request.session_id, started_at=now)
    record = record.with_messages(request.messages, now)
    await session_manager.save_session(record)

    return SaveSessionResponse(
        session_id=record.session_id,
        message_count=record.message_count,
        tool_calls_count=record.tool_calls_count,
    )


@router.post("/end",
          response_model=EndSessionResponse)
def end_session(request: SessionMessagesRequest):
    """
    Submits the session for background analysis; poll /v1/tasks/status/{task_id} for the result.
    """
    if not request.session_id or request.messages is None:
        return _missing_fields_response()

    messages = [message.model_dump(exclude_none=True) for message in request.messages]
    task = end_session_task.delay(request.session_id, messages)
    console.info(f"Session '{request.session_id}' submitted for analysis as task {task.id}.")
    return EndSessionResponse(session_id=request.session_id, task_id=task.id, status="PENDING")


@router.get("/{session_id}",
         response_model=SessionRecord)
async def get_session(session_id: str):
    """Returns the stored record for a session."""
    record = await session_manager.get_session(session_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return record
