# Contains the mailbox tools: direct search and sending through the backend proxy.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, ToolInput

# --- Tool 1: Search Mailbox ---

class SearchGmailInput(ToolInput):
    """Input model for the Search Gmail tool."""
    search: Optional[str] = Field(default="", description="Search term, or 'from:address' / 'subject:text'.")
    days: Optional[int] = Field(default=7, description="How many days back to search.")
    limit: Optional[int] = Field(default=10, description="Maximum number of mails to return.")

class SearchGmailTool(BackendTool):
    """Searches the user's mailbox for recent messages."""
    name: str = "search_gmail"
    description: str = "Search the user's Gmail. Fetch recent mail, filter by sender or subject, find specific messages."
    args_schema: Type[ToolInput] = SearchGmailInput
    method: str = "POST"
    path: str = "/api/gmail-direct-search"

    def build_payload(self, args: SearchGmailInput) -> Dict[str, Any]:
        return {
            "search": args.search or "",
            "days": args.days or 7,
            "limit": args.limit or 10,
        }

# --- Tool 2: Send Mail ---

class SendEmailInput(ToolInput):
    """Input model for the Send Email tool."""
    to: str = Field(..., description="Recipient email address.")
    subject: str = Field(..., description="Email subject.")
    body: str = Field(..., description="Email body text.")

class SendEmailTool(BackendTool):
    """
    Sends an email from the user's account. The session id travels in the body so
    the backend can attach the sent mail to the conversation that requested it.
    """
    name: str = "send_email"
    description: str = "Send an email from the user's Gmail account."
    args_schema: Type[ToolInput] = SendEmailInput
    method: str = "POST"
    path: str = "/api/gmail/send"

    def build_payload(self, args: SendEmailInput) -> Dict[str, Any]:
        payload = {"to": args.to, "subject": args.subject, "body": args.body}
        if args.session_id:
            payload["sessionId"] = args.session_id
        return payload
