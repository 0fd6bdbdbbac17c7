# Contains the contact lookup tools.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, ToolInput


class SearchContactsInput(ToolInput):
    """Input model for the Search Contacts tool."""
    query: str = Field(..., description="Name, email or phone number to look for.")
    limit: Optional[int] = Field(default=10, description="Maximum number of contacts.")

class SearchContactsTool(BackendTool):
    name: str = "search_contacts"
    description: str = "Search the user's contacts, e.g. to find an email address before sending mail."
    args_schema: Type[ToolInput] = SearchContactsInput
    path: str = "/api/contacts/search"

    def build_payload(self, args: SearchContactsInput) -> Dict[str, Any]:
        return {"q": args.query, "limit": args.limit or 10}


class GetContactInput(ToolInput):
    """Input model for the Get Contact tool."""
    id: str = Field(..., description="Contact ID.")

class GetContactTool(BackendTool):
    name: str = "get_contact"
    description: str = "Get full details for one contact."
    args_schema: Type[ToolInput] = GetContactInput
    path: str = "/api/contacts/get"

    def build_payload(self, args: GetContactInput) -> Dict[str, Any]:
        return {"id": args.id}
