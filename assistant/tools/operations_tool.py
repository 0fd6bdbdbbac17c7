# Contains the daily operational tools: the morning briefing and a manual sync trigger.
# Date: 2026-10-19
# Version: 0.1.0

from .base_tool import NoArgsBackendTool


class GetDailyBriefingTool(NoArgsBackendTool):
    name: str = "get_daily_briefing"
    description: str = "Get the user's daily briefing (calendar, mail, todos and context in one)."
    path: str = "/api/daily-briefing"


class TriggerSyncTool(NoArgsBackendTool):
    name: str = "trigger_sync"
    description: str = "Start a manual sync of mail, calendar and cleanup jobs."
    method: str = "POST"
    path: str = "/api/trigger-sync"
