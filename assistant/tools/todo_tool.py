# Contains the todo tools.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Literal, Optional, Type
from .base_tool import BackendTool, ToolInput

TodoStatus = Literal["pending", "completed"]


class GetTodosInput(ToolInput):
    """Input model for the Get Todos tool."""
    status: Optional[TodoStatus] = Field(default=None, description="Only return todos with this status.")
    limit: Optional[int] = Field(default=None, description="Maximum number of todos.")

class GetTodosTool(BackendTool):
    name: str = "get_todos"
    description: str = "Get the user's todos, optionally filtered by status."
    args_schema: Type[ToolInput] = GetTodosInput
    path: str = "/api/todos"

    def build_payload(self, args: GetTodosInput) -> Dict[str, Any]:
        return {"status": args.status, "limit": args.limit}


class CreateTodoInput(ToolInput):
    """Input model for the Create Todo tool."""
    title: str = Field(..., description="Todo title.")
    description: Optional[str] = Field(default=None, description="Longer description.")
    importance: Optional[int] = Field(default=None, description="Importance from 1 to 5.")
    deadline: Optional[str] = Field(default=None, description="Deadline, ISO 8601.")

class CreateTodoTool(BackendTool):
    name: str = "create_todo"
    description: str = "Create a new todo for the user."
    args_schema: Type[ToolInput] = CreateTodoInput
    method: str = "POST"
    path: str = "/api/todos"


class UpdateTodoInput(ToolInput):
    """Input model for the Update Todo tool."""
    id: str = Field(..., description="ID of the todo.")
    title: Optional[str] = Field(default=None, description="New title.")
    description: Optional[str] = Field(default=None, description="New description.")
    status: Optional[TodoStatus] = Field(default=None, description="New status.")
    importance: Optional[int] = Field(default=None, description="New importance from 1 to 5.")
    deadline: Optional[str] = Field(default=None, description="New deadline, ISO 8601.")

class UpdateTodoTool(BackendTool):
    name: str = "update_todo"
    description: str = "Update an existing todo, for example to mark it completed."
    args_schema: Type[ToolInput] = UpdateTodoInput
    method: str = "POST"
    path: str = "/api/todos/update"


class DeleteTodoInput(ToolInput):
    """Input model for the Delete Todo tool."""
    id: str = Field(..., description="ID of the todo to delete.")

class DeleteTodoTool(BackendTool):
    name: str = "delete_todo"
    description: str = "Delete a todo."
    args_schema: Type[ToolInput] = DeleteTodoInput
    method: str = "POST"
    path: str = "/api/todos/delete"

    def build_payload(self, args: DeleteTodoInput) -> Dict[str, Any]:
        return {"id": args.id}
