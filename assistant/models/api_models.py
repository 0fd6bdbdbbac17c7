# The module is to define the API models for the assistant server.
# Field aliases are the camelCase names the browser client sends and expects.
# Date: 2026-10-19
# Version: 0.2.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from assistant.models.common import Message


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(ApiModel):
    """
    Defines the request body for the /v1/chat endpoint.
    Attributes:
        message (Optional[str]): The user's text. Blank or missing is rejected with 400.
        context (Optional[str]): Free-text context spliced into the system prompt.
        history (List[Message]): Prior turns, supplied and persisted by the caller.
        session_id (Optional[str]): Opaque id forwarded to every tool call.
    """
    message: Optional[str] = Field(default=None, description="The user's text input.")
    context: Optional[str] = Field(default=None, description="Optional context block for the system prompt.")
    history: List[Message] = Field(default_factory=list, description="Prior turns of the conversation.")
    session_id: Optional[str] = Field(default=None, alias="sessionId", description="The conversation's session id.")


class ChatResponse(ApiModel):
    """
    Defines the response body for the /v1/chat endpoint.
    Attributes:
        response (str): The assistant's final reply.
        should_save_insight (bool): Advisory flag suggesting the turn is worth remembering.
        tool_calls_used (int): How many tool calls the turn made.
        timestamp (str): ISO 8601 time of the turn.
    """
    response: str
    should_save_insight: bool = Field(..., alias="shouldSaveInsight")
    tool_calls_used: Optional[int] = Field(default=None, alias="toolCallsUsed")
    timestamp: str


class ErrorResponse(ApiModel):
    error: str
    details: Optional[str] = None


class NewSessionResponse(ApiModel):
    """
    Defines the response body for the /v1/session/new endpoint.
    Attributes:
        session_id (str): The unique ID for the newly created conversation session.
        context (str): Startup context the caller can send back with each chat request.
        context_breakdown (Dict[str, str]): What each context layer contributed.
        token_estimate (int): Rough token count of the context.
        message (str): A message indicating the session has been created successfully.
    """
    session_id: str = Field(..., alias="sessionId")
    context: str
    context_breakdown: Dict[str, str] = Field(default_factory=dict, alias="contextBreakdown")
    token_estimate: int = Field(default=0, alias="tokenEstimate")
    message: str


class SessionMessagesRequest(ApiModel):
    """Request body for saving or ending a session."""
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    messages: Optional[List[Message]] = None


class SaveSessionResponse(ApiModel):
    session_id: str = Field(..., alias="sessionId")
    message_count: int = Field(..., alias="messageCount")
    tool_calls_count: int = Field(..., alias="toolCallsCount")


class EndSessionResponse(ApiModel):
    session_id: str = Field(..., alias="sessionId")
    task_id: str = Field(..., alias="taskId")
    status: str


class TaskStatusResponse(ApiModel):
    """Defines the response body for the task status endpoint."""
    task_id: str = Field(..., alias="taskId")
    status: str
    result: Optional[Any] = None
