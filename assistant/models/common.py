# The module is to define the common conversation models for the assistant.
# Date: 2026-10-19
# Version: 0.2.0

import json
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional, Literal, Union

Role = Literal["system", "user",
               "assistant", "tool"]


class FunctionCall(BaseModel):
    """
    The function part of a tool call.
    Attributes:
        name (str): The name of the tool the model wants to run.
        arguments (Union[str, dict]): Raw arguments, either a JSON string or an already-parsed object.
    """
    name: str = Field(..., description="The name of the tool the model wants to run.")
    arguments: Union[str, Dict[str, Any]] = Field(default="{}", description="JSON-encoded or parsed arguments.")

    @field_serializer("arguments")
    def _serialize_arguments(self, arguments: Union[str, Dict[str, Any]]) -> str:
        # Providers only accept the string form when the call is echoed back.
        if isinstance(arguments, str):
            return arguments
        return json.dumps(arguments, ensure_ascii=False)

    def parsed_arguments(self) -> Dict[str, Any]:
        """
        Returns the arguments as a dict. Malformed JSON, or JSON that is not an
        object, degrades to an empty dict so that one bad call cannot abort the turn.
        """
        if isinstance(self.arguments, dict):
            return dict(self.arguments)
        if not self.arguments or not self.arguments.strip():
            return {}
        try:
            parsed = json.loads(self.arguments)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}


class ToolCall(BaseModel):
    """
    Represents a tool call made by the assistant, including the function name and arguments.
    Attributes:
        id (str): The unique ID for the tool call.
        function (FunctionCall): The function name and arguments.
        type (str): The type of the tool call, e.g., 'function'.
    """
    id: str = Field(..., description="The unique ID for the tool call.")
    function: FunctionCall = Field(..., description="The function name and arguments.")
    type: str = Field(default="function", description="The type of the tool call, e.g., 'function'.")


class Message(BaseModel):
    """
    Represents a message in the conversation, which can be from the system, user, assistant, or tool.
    Attributes:
        role (Role): The role of the message sender (system, user, assistant, or tool).
        content (Optional[str]): The content of the message.
        tool_calls (Optional[List[ToolCall]]): A list of tool calls requested by the assistant.
        tool_call_id (Optional[str]): The ID of the tool call this message is a result of.
        name (Optional[str]): The tool that produced this message, for tool messages.
    """
    role: Role = Field(..., description="The role of the message sender.")
    content: Optional[str] = Field(default=None, description="The content of the message.")
    tool_calls: Optional[List[ToolCall]] = Field(default=None, description="A list of tool calls requested by the assistant.")
    tool_call_id: Optional[str] = Field(default=None, description="The ID of the tool call this message is a result of.")
    name: Optional[str] = Field(default=None, description="The name of the tool that produced this result.")

    def to_llm_dict(self) -> Dict[str, Any]:
        """The wire form sent to the chat-completions endpoint."""
        return self.model_dump(exclude_none=True)


class ToolResult(BaseModel):
    """
    The outcome of one dispatched tool call. Always produced, even when the call failed.
    Attributes:
        name (str): The tool that was called.
        tool_call_id (str): The ID of the request this result answers.
        payload (Any): The backend's JSON body, or an error-shaped object.
        is_error (bool): Whether the payload describes a failure.
    """
    name: str
    tool_call_id: str
    payload: Any = None
    is_error: bool = False

    @classmethod
    def failure(cls, name: str, tool_call_id: str, error: str) -> "ToolResult":
        return cls(
            name=name,
            tool_call_id=tool_call_id,
            payload={"success": False, "error": error},
            is_error=True,
        )

    def to_message(self) -> Message:
        return Message(
            role="tool",
            tool_call_id=self.tool_call_id,
            name=self.name,
            content=json.dumps(self.payload, ensure_ascii=False, default=str),
        )


class TurnOutcome(BaseModel):
    """The final result of one user turn, handed back to the HTTP layer."""
    response: str
    should_save_insight: bool
    tool_calls_used: int
    timestamp: str


def count_tool_calls(messages: List[Message]) -> int:
    """Counts the tool calls requested across all assistant messages."""
    return sum(
        len(message.tool_calls or [])
        for message in messages
        if message.role == "assistant"
    )


SessionStatus = Literal["active", "completed"]


class SessionAnalysis(BaseModel):
    """
    The LLM's summary of a finished session.
    Attributes:
        summary (str): Two or three sentences about what was discussed.
        topics (List[str]): At most five keywords.
        importance (int): 1 (small talk) to 5 (critical decisions).
        insights (List[str]): At most three insights worth remembering.
    """
    summary: str
    topics: List[str] = Field(default_factory=list)
    importance: int = 3
    insights: List[str] = Field(default_factory=list)


class SessionRecord(BaseModel):
    """
    A conversation session as stored in Redis. The caller owns the message history;
    the record is a snapshot of whatever it last saved.
    Stored under its field names; served over HTTP under camelCase aliases.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    status: SessionStatus = "active"
    messages: List[Message] = Field(default_factory=list)
    message_count: int = 0
    tool_calls_count: int = 0
    started_at: str
    updated_at: Optional[str] = None
    ended_at: Optional[str] = None
    summary: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    importance: Optional[int] = None

    def with_messages(self, messages: List[Message], now: str) -> "SessionRecord":
        return self.model_copy(update={
            "messages": messages,
            "message_count": len(messages),
            "tool_calls_count": count_tool_calls(messages),
            "updated_at": now,
        })
