# The module holds the prompts used by the orchestrator and the session analyzer.
# Date: 2026-10-19
# Version: 0.1.0

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

SWEDISH_WEEKDAYS = ("måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag", "söndag")
SWEDISH_MONTHS = (
    "januari", "februari", "mars", "april", "maj", "juni",
    "juli", "augusti", "september", "oktober", "november", "december",
)

PERSONA_PROMPT = (
    "You are a personal AI assistant with access to the user's mail, calendar, todos, "
    "long-term memory, receipts, subscriptions, files, health log and contacts through tools.\n\n"

    "### How to work\n"
    "- Use the tools to look up real data instead of guessing. Never invent emails, events or amounts.\n"
    "- You may call several tools at once when they do not depend on each other.\n"
    "- If a tool returns an error, tell the user briefly what could not be fetched and continue with what you have.\n"
    "- Confirm what you did after creating, updating, deleting or sending anything.\n"
    "- Answer in the language the user writes in. Be short and concrete.\n"
)


def format_local_datetime(now: datetime, timezone_name: str) -> str:
    """Renders a timestamp in Swedish, e.g. 'måndag 19 oktober 2026, kl. 14:05 (Europe/Stockholm)'."""
    local = now.astimezone(ZoneInfo(timezone_name))
    weekday = SWEDISH_WEEKDAYS[local.weekday()]
    month = SWEDISH_MONTHS[local.month - 1]
    return f"{weekday} {local.day} {month} {local.year}, kl. {local:%H:%M} ({timezone_name})"


def get_system_prompt(now: datetime, timezone_name: str, context: Optional[str] = None) -> str:
    """
    Returns the system prompt: persona, current local date and time, and the
    caller-supplied context block when there is one.
    """
    prompt = PERSONA_PROMPT + f"\n### Current date and time\n{format_local_datetime(now, timezone_name)}\n"
    if context and context.strip():
        prompt += f"\n### Context about the user\n{context.strip()}\n"
    return prompt


SESSION_ANALYSIS_PROMPT = """You analyse conversations and write summaries.

Analyse the conversation and reply with a JSON object:
{
  "summary": "2-3 sentences about what was discussed",
  "topics": ["topic1", "topic2"],
  "importance": 3,
  "insights": ["insight1"]
}

Rules:
- topics: at most 5 keywords.
- importance: 1-2 small talk, 3 normal conversation, 4 important decisions or problems, 5 critical decisions or major life events.
- insights: at most 3 important insights worth remembering (optional).

Reply with the JSON only, no other text."""
