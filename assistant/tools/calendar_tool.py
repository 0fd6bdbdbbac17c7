# Contains the calendar tools: listing, creating, updating and deleting events.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, ToolInput

# --- Tool 1: List Events ---

class GetCalendarEventsInput(ToolInput):
    """Input model for the Get Calendar Events tool."""
    days: Optional[int] = Field(default=7, description="How many days ahead to look.")
    time_min: Optional[str] = Field(default=None, alias="timeMin", description="Start of the window, ISO 8601.")
    time_max: Optional[str] = Field(default=None, alias="timeMax", description="End of the window, ISO 8601.")
    max_results: Optional[int] = Field(default=None, alias="maxResults", description="Maximum number of events.")

class GetCalendarEventsTool(BackendTool):
    """
    Lists calendar events. An explicit timeMin/timeMax window takes precedence;
    otherwise the backend is asked for the next 'days' days.
    """
    name: str = "get_calendar_events"
    description: str = "Get the user's calendar events: what is booked today, this week, or on a specific date."
    args_schema: Type[ToolInput] = GetCalendarEventsInput
    path: str = "/api/calendar/events"

    def build_payload(self, args: GetCalendarEventsInput) -> Dict[str, Any]:
        if args.time_min or args.time_max:
            return {
                "timeMin": args.time_min,
                "timeMax": args.time_max,
                "maxResults": args.max_results,
            }
        return {"days": args.days or 7, "maxResults": args.max_results}

# --- Tool 2: Create Event ---

class CreateCalendarEventInput(ToolInput):
    """Input model for the Create Calendar Event tool."""
    summary: str = Field(..., description="Event title.")
    start: str = Field(..., description="Start time, ISO 8601.")
    end: str = Field(..., description="End time, ISO 8601.")
    description: Optional[str] = Field(default=None, description="Optional description.")
    location: Optional[str] = Field(default=None, description="Optional location.")

class CreateCalendarEventTool(BackendTool):
    name: str = "create_calendar_event"
    description: str = "Create a new calendar event for the user."
    args_schema: Type[ToolInput] = CreateCalendarEventInput
    method: str = "POST"
    path: str = "/api/calendar/create"

# --- Tool 3: Update Event ---

class UpdateCalendarEventInput(ToolInput):
    """Input model for the Update Calendar Event tool."""
    event_id: str = Field(..., alias="eventId", description="ID of the event to update.")
    summary: Optional[str] = Field(default=None, description="New title.")
    start: Optional[str] = Field(default=None, description="New start time, ISO 8601.")
    end: Optional[str] = Field(default=None, description="New end time, ISO 8601.")
    description: Optional[str] = Field(default=None, description="New description.")
    location: Optional[str] = Field(default=None, description="New location.")

class UpdateCalendarEventTool(BackendTool):
    name: str = "update_calendar_event"
    description: str = "Update an existing calendar event."
    args_schema: Type[ToolInput] = UpdateCalendarEventInput
    method: str = "POST"
    path: str = "/api/calendar/update"

# --- Tool 4: Delete Event ---

class DeleteCalendarEventInput(ToolInput):
    """Input model for the Delete Calendar Event tool."""
    event_id: str = Field(..., alias="eventId", description="ID of the event to delete.")

class DeleteCalendarEventTool(BackendTool):
    name: str = "delete_calendar_event"
    description: str = "Delete a calendar event."
    args_schema: Type[ToolInput] = DeleteCalendarEventInput
    method: str = "POST"
    path: str = "/api/calendar/delete"

    def build_payload(self, args: DeleteCalendarEventInput) -> Dict[str, Any]:
        return {"eventId": args.event_id}
