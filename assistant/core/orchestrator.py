# assistant/core/orchestrator.py
# Drives one user turn through the tool-calling loop.
# Date: 2026-10-19
# Version: 0.2.0

import asyncio
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Any
from assistant.core.config import get_settings
from assistant.core.errors import EmptyMessageError, IterationLimitError
from assistant.core.prompts import get_system_prompt
from assistant.core.tool_registry import tool_registry
from assistant.models.common import Message, ToolCall, ToolResult, TurnOutcome
from assistant.services.backend_client import BackendClient, backend_client
from assistant.services.llm_connector import call_llm
from assistant.utils.logger import console

# English and Swedish forms; matched as case-insensitive substrings.
INSIGHT_KEYWORDS = (
    "project", "projekt",
    "deadline",
    "subscription", "prenumeration",
    "cost", "kostnad",
    "stress",
    "decision", "beslut",
    "important", "viktig",
    "problem",
)

SESSION_ID_KEY = "sessionId"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_conversation(user_message: str, context: Optional[str], history: Optional[List[Message]],
                       now: datetime) -> List[Message]:
    """Builds [system, *history, user] for a fresh turn."""
    settings = get_settings()
    system_message = Message(
        role="system",
        content=get_system_prompt(now, settings.ASSISTANT_TIMEZONE, context),
    )
    return [system_message, *(history or []), Message(role="user", content=user_message)]


def should_save_insight(user_message: str, reply: str) -> bool:
    """Advisory flag: does the exchange mention a topic worth keeping as a long-term memory?"""
    text = f"{user_message} {reply}".lower()
    return any(keyword in text for keyword in INSIGHT_KEYWORDS)


def merge_session_id(arguments: Dict[str, Any], session_id: Optional[str]) -> Dict[str, Any]:
    """Adds the session id to a tool's arguments unless the model already supplied one."""
    if session_id and SESSION_ID_KEY not in arguments:
        return {**arguments, SESSION_ID_KEY: session_id}
    return arguments


async def _execute_tool(tool_call: ToolCall, session_id: Optional[str], client: BackendClient) -> ToolResult:
    """Executes a single tool call. Every failure becomes an error-shaped result."""
    tool_name = tool_call.function.name
    arguments = merge_session_id(tool_call.function.parsed_arguments(), session_id)
    try:
        console.info(f"Executing tool '{tool_name}' ({tool_call.id}).")
        payload = await tool_registry.execute(tool_name, arguments, client, session_id=session_id)
    except Exception as e:
        console.exception(f"Error executing tool '{tool_name}'")
        return ToolResult.failure(tool_name, tool_call.id, str(e))

    is_error = isinstance(payload, dict) and payload.get("success") is False
    return ToolResult(name=tool_name, tool_call_id=tool_call.id, payload=payload, is_error=is_error)


async def dispatch_tool_calls(tool_calls: List[ToolCall], session_id: Optional[str],
                              client: BackendClient) -> List[ToolResult]:
    """Runs every tool call of one iteration concurrently and waits for all of them."""
    return list(await asyncio.gather(
        *(_execute_tool(tool_call, session_id, client) for tool_call in tool_calls)
    ))


async def run_turn(user_message: Optional[str],
                   context: Optional[str] = None,
                   history: Optional[List[Message]] = None,
                   session_id: Optional[str] = None,
                   max_iterations: Optional[int] = None,
                   client: Optional[BackendClient] = None,
                   clock: Optional[Callable[[], datetime]] = None) -> TurnOutcome:
    """
    Runs one user turn to completion.

    The model is called with the full conversation and the tool schema. While it asks
    for tools, all requested calls are executed concurrently, their results appended,
    and the model is called again. The turn ends when a reply carries no tool calls.

    Raises:
        EmptyMessageError: If the message is blank; raised before any network call.
        LLMProviderError: If a provider call fails.
        IterationLimitError: If the model still requests tools after max_iterations calls.
    """
    if not user_message or not user_message.strip():
        raise EmptyMessageError()

    settings = get_settings()
    if max_iterations is None:
        max_iterations = settings.MAX_TOOL_ITERATIONS
    client = client or backend_client
    now = (clock or _utcnow)()

    messages = build_conversation(user_message, context, history, now)
    tools = tool_registry.get_definitions()
    tool_calls_used = 0

    for iteration in range(max_iterations):
        console.rule(f"Tool loop iteration {iteration + 1}/{max_iterations}")
        assistant_message = await call_llm(
            messages=[message.to_llm_dict() for message in messages],
            tools=tools,
        )

        if not assistant_message.tool_calls:
            reply = assistant_message.content or ""
            break

        console.info(f"Model requested {len(assistant_message.tool_calls)} tool call(s).")
        results = await dispatch_tool_calls(assistant_message.tool_calls, session_id, client)
        failed = [result.name for result in results if result.is_error]
        if failed:
            console.warning(f"Tool calls returned errors: {failed}")

        messages = [*messages, assistant_message, *(result.to_message() for result in results)]
        tool_calls_used += len(results)
    else:
        console.error(f"Model still requested tools after {max_iterations} iterations.")
        raise IterationLimitError(max_iterations, tool_calls_used)

    console.success(f"Turn finished after {iteration + 1} provider call(s), {tool_calls_used} tool call(s).")
    return TurnOutcome(
        response=reply,
        should_save_insight=should_save_insight(user_message, reply),
        tool_calls_used=tool_calls_used,
        timestamp=now.isoformat(),
    )
