# Contains the long-term memory tools backed by the smart memory store.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Literal, Optional, Type
from .base_tool import BackendTool, ToolInput


class SearchMemoryInput(ToolInput):
    """
    Input model for the Search Memory tool.
    Attributes:
        query (str): Free-text search term.
        smart (Optional[bool]): Semantic search; on unless explicitly disabled.
        limit (Optional[int]): Maximum number of memories to return.
    """
    query: str = Field(..., description="Search term.")
    smart: Optional[bool] = Field(default=True, description="Use semantic search (default: true).")
    limit: Optional[int] = Field(default=5, description="Maximum number of results.")

class SearchMemoryTool(BackendTool):
    """Searches stored memories about projects, people and ideas."""
    name: str = "search_memory"
    description: str = "Search the user's smart memory for earlier information about projects, people and ideas."
    args_schema: Type[ToolInput] = SearchMemoryInput
    path: str = "/api/memory-search"

    def build_payload(self, args: SearchMemoryInput) -> Dict[str, Any]:
        return {
            "q": args.query,
            "smart": args.smart is not False,
            "limit": args.limit or 5,
        }


class StoreMemoryInput(ToolInput):
    """Input model for the Store Memory tool."""
    content: str = Field(..., description="Content to remember.")
    memory_type: Optional[Literal["email", "calendar", "todo", "note", "receipt", "conversation"]] = Field(
        default=None, alias="type", description="Kind of memory."
    )
    title: Optional[str] = Field(default=None, description="Short title.")
    importance: Optional[int] = Field(default=None, description="Importance from 1 to 5.")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Extra metadata.")

class StoreMemoryTool(BackendTool):
    name: str = "store_memory"
    description: str = "Store a new memory in the user's smart memory."
    args_schema: Type[ToolInput] = StoreMemoryInput
    method: str = "POST"
    path: str = "/api/memory-store"
