# The module is to define the API endpoint for chat turns.
# Date: 2026-10-19
# Version: 0.2.0

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from assistant.core.errors import AssistantError
from assistant.core.orchestrator import run_turn
from assistant.utils.logger import console
from assistant.models.api_models import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter()

@router.post("/",
          response_model=ChatResponse,
          responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def chat(request: ChatRequest):
    """
    Handles a single user turn: runs the tool-calling loop and returns the final reply.
    """
    if not request.message or not request.message.strip():
        return JSONResponse(status_code=400, content={"error": "Message is required"})

    console.info(f"Received chat request for session_id: {request.session_id}")

    try:
        outcome = await run_turn(
            user_message=request.message,
            context=request.context,
            history=request.history,
            session_id=request.session_id,
        )
    except AssistantError as e:
        console.error(f"Chat turn failed for session_id {request.session_id}: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process chat", "details": str(e)},
        )

    console.success(f"Sending response for session_id: {request.session_id}")

    return ChatResponse(
        response=outcome.response,
        should_save_insight=outcome.should_save_insight,
        tool_calls_used=outcome.tool_calls_used,
        timestamp=outcome.timestamp,
    )
