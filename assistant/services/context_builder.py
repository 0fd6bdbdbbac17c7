# This module assembles the startup context handed to the caller when a session begins.
# Date: 2026-10-19
# Version: 0.1.0

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo
from redis.exceptions import RedisError

from assistant.core.config import get_settings
from assistant.core.prompts import SWEDISH_MONTHS, format_local_datetime
from assistant.services.backend_client import BackendClient
from assistant.services.session_manager import SessionManager
from assistant.utils.logger import console


@dataclass
class SessionContext:
    """Context text plus a per-layer note of what was found."""
    text: str
    breakdown: Dict[str, str] = field(default_factory=dict)
    token_estimate: int = 0


def estimate_tokens(text: str) -> int:
    """Rough estimate: one token per four characters."""
    return math.ceil(len(text) / 4)


async def _fetch_profile(client: BackendClient) -> Optional[str]:
    data = await client.try_request("GET", "/api/user-context-summary")
    if isinstance(data, dict) and data.get("success") and data.get("summary"):
        return str(data["summary"])
    return None


async def _fetch_health(client: BackendClient) -> Optional[str]:
    data = await client.try_request("GET", "/api/health-today")
    if not isinstance(data, dict) or not data.get("success") or not data.get("health"):
        return None
    health: Dict[str, Any] = data["health"]
    lines = []
    if health.get("mood_score"):
        lines.append(f"- Mood: {health['mood_score']}/10")
    if health.get("energy_level"):
        lines.append(f"- Energy: {health['energy_level']}/10")
    if health.get("stress_level"):
        lines.append(f"- Stress: {health['stress_level']}/10")
    if health.get("notes"):
        lines.append(f"- Notes: {health['notes']}")
    return "\n".join(lines) or None


RECENT_SESSION_COUNT = 3


def _short_local_datetime(timestamp: str, timezone_name: str) -> str:
    local = datetime.fromisoformat(timestamp).astimezone(ZoneInfo(timezone_name))
    return f"{local.day} {SWEDISH_MONTHS[local.month - 1][:3]} {local:%H:%M}"


async def _fetch_recent_sessions(sessions: Optional[SessionManager], timezone_name: str) -> List[str]:
    """One block per recent completed session: start time, summary, topics."""
    if sessions is None:
        return []
    try:
        records = await sessions.get_recent_completed(RECENT_SESSION_COUNT)
    except RedisError as e:
        console.warning(f"Could not read recent sessions: {e}")
        return []
    blocks = []
    for record in records:
        block = f"### {_short_local_datetime(record.started_at, timezone_name)}\n{record.summary}\n"
        if record.topics:
            block += f"*Topics: {', '.join(record.topics)}*\n"
        blocks.append(block)
    return blocks


async def build_session_context(client: BackendClient, now: datetime,
                                sessions: Optional[SessionManager] = None) -> SessionContext:
    """
    Builds the context block from the user's profile summary, the most recent
    completed sessions (when a session store is given) and today's health.
    Each layer is optional: a failing or empty layer is left out and noted in the breakdown.
    """
    settings = get_settings()
    breakdown: Dict[str, str] = {}
    sections = []

    profile = await _fetch_profile(client)
    if profile:
        sections.append(f"## User context\n\n{profile}\n")
        breakdown["profile"] = "Data exists"
    else:
        breakdown["profile"] = "No data"

    recent = await _fetch_recent_sessions(sessions, settings.ASSISTANT_TIMEZONE)
    if recent:
        sections.append("## Recent conversations\n\n" + "\n".join(recent))
        breakdown["recentSessions"] = f"{len(recent)} sessions"
    else:
        breakdown["recentSessions"] = "No data"

    health = await _fetch_health(client)
    if health:
        sections.append(f"## Health today\n\n{health}\n")
        breakdown["health"] = "Data exists"
    else:
        breakdown["health"] = "No data"

    header = f"# Full context\n\n**Date:** {format_local_datetime(now, settings.ASSISTANT_TIMEZONE)}\n\n---\n\n"
    text = header + "\n".join(sections)
    console.info(f"Session context built: {breakdown}")
    return SessionContext(text=text, breakdown=breakdown, token_estimate=estimate_tokens(text))
