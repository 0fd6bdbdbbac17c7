# This module asks the LLM to summarise a finished session.
# Date: 2026-10-19
# Version: 0.1.0

import json
import re
from typing import List
from pydantic import ValidationError
from assistant.core.errors import LLMProviderError
from assistant.core.prompts import SESSION_ANALYSIS_PROMPT
from assistant.models.common import Message, SessionAnalysis
from assistant.services.llm_connector import call_llm
from assistant.utils.logger import console

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

MAX_TOPICS = 5
MAX_INSIGHTS = 3


def render_transcript(messages: List[Message]) -> str:
    """User turns and assistant replies only; tool traffic is left out."""
    lines = []
    for message in messages:
        if message.role == "user":
            lines.append(f"User: {message.content}")
        elif message.role == "assistant" and message.content:
            lines.append(f"Assistant: {message.content}")
    return "\n\n".join(lines)


def parse_analysis(text: str) -> SessionAnalysis:
    """
    Extracts the first {...} block from the model's reply and validates it.
    Raises ValueError (or ValidationError) when no usable JSON object is present.
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise ValueError("No JSON object in analysis reply")
    data = json.loads(match.group(0))
    analysis = SessionAnalysis.model_validate(data)
    return analysis.model_copy(update={
        "topics": analysis.topics[:MAX_TOPICS],
        "insights": analysis.insights[:MAX_INSIGHTS],
        "importance": min(max(analysis.importance, 1), 5),
    })


def fallback_analysis(messages: List[Message]) -> SessionAnalysis:
    return SessionAnalysis(summary=f"Conversation with {len(messages)} messages")


async def analyze_conversation(messages: List[Message]) -> SessionAnalysis:
    """
    Summarises a conversation. Any provider or parsing failure yields the
    fallback analysis, so ending a session never fails on the summary alone.
    """
    prompt_messages = [
        {"role": "system", "content": SESSION_ANALYSIS_PROMPT},
        {"role": "user", "content": f"Analyse this conversation:\n\n{render_transcript(messages)}"},
    ]
    try:
        reply = await call_llm(prompt_messages, temperature=0.3, max_tokens=1000)
        analysis = parse_analysis(reply.content or "")
    except (LLMProviderError, ValueError, ValidationError) as e:
        console.warning(f"Session analysis failed, using fallback summary: {e}")
        return fallback_analysis(messages)

    console.success(f"Session analysed: importance {analysis.importance}, {len(analysis.insights)} insight(s).")
    return analysis
