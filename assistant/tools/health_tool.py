# Contains the daily health tools (mood, energy, stress).
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, NoArgsBackendTool, ToolInput


class GetHealthTodayTool(NoArgsBackendTool):
    name: str = "get_health_today"
    description: str = "Get today's mood, energy and stress for the user."
    path: str = "/api/health-today"


class UpdateHealthDataInput(ToolInput):
    """Input model for the Update Health Data tool."""
    mood: Optional[int] = Field(default=None, description="Mood 1-10.")
    energy: Optional[int] = Field(default=None, description="Energy 1-10.")
    stress: Optional[int] = Field(default=None, description="Stress 1-10.")
    notes: Optional[str] = Field(default=None, description="Free-text notes.")

class UpdateHealthDataTool(BackendTool):
    name: str = "update_health_data"
    description: str = "Update the user's daily health data."
    args_schema: Type[ToolInput] = UpdateHealthDataInput
    method: str = "POST"
    path: str = "/api/update-health"


class ViewHealthTrendsInput(ToolInput):
    """Input model for the View Health Trends tool."""
    days: Optional[int] = Field(default=30, description="Number of days to include.")

class ViewHealthTrendsTool(BackendTool):
    name: str = "view_health_trends"
    description: str = "Show the user's health trends over time."
    args_schema: Type[ToolInput] = ViewHealthTrendsInput
    path: str = "/api/health-trends"

    def build_payload(self, args: ViewHealthTrendsInput) -> Dict[str, Any]:
        return {"days": args.days or 30}
