# Contains the user-context tools: the layered profile the assistant reads and updates.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Optional, Type
from .base_tool import BackendTool, NoArgsBackendTool, ToolInput


class GetUserContextSummaryTool(NoArgsBackendTool):
    name: str = "get_user_context_summary"
    description: str = "Get the user's full context summary (core identity, current situation, recent insights)."
    path: str = "/api/user-context-summary"


class SaveInsightInput(ToolInput):
    """Input model for the Save Insight tool."""
    insight: str = Field(..., description="The insight to save.")
    section: Optional[str] = Field(default=None, description="Section to file the insight under.")
    importance: Optional[int] = Field(default=None, description="Importance from 1 to 5.")

class SaveInsightTool(BackendTool):
    name: str = "save_insight_from_conversation"
    description: str = "Save an important insight from the conversation to the user's context."
    args_schema: Type[ToolInput] = SaveInsightInput
    method: str = "POST"
    path: str = "/api/save-insight"


class UpdateUserContextInput(ToolInput):
    """Input model for the Update User Context tool."""
    section: str = Field(..., description="Section to update, e.g. 'projects' or 'economy'.")
    content: str = Field(..., description="New content for the section.")
    layer: Optional[str] = Field(default=None, description="Context layer (default: current).")

class UpdateUserContextTool(BackendTool):
    name: str = "update_user_context"
    description: str = "Update a section of the user's current context."
    args_schema: Type[ToolInput] = UpdateUserContextInput
    method: str = "POST"
    path: str = "/api/update-context"
