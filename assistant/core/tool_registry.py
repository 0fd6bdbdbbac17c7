# Discovers and manages all available backend tools automatically.
# Date: 2026-10-19
# Version: 0.2.0

import pkgutil
import inspect
from typing import Dict, List, Any, Optional, TYPE_CHECKING
from assistant import tools as tools_package
from assistant.tools.base_tool import BaseTool
from assistant.utils.logger import console

if TYPE_CHECKING:
    from assistant.services.backend_client import BackendClient

class ToolRegistry:
    """
    A lookup table from tool name to tool instance.

    Tools are discovered once, at construction, and the schema handed to the LLM
    is built at the same time; neither changes afterwards.
    """
    def __init__(self):
        self.tools: Dict[str, BaseTool] = {}
        self._discover_tools()
        self._definitions: List[Dict[str, Any]] = [tool.get_definition() for tool in self.tools.values()]
        console.success(f"Tool discovery complete. Found {len(self.tools)} tools.")

    def _discover_tools(self):
        """
        Scans the assistant.tools package, imports all modules, finds concrete classes
        that inherit from BaseTool and declare a name, and registers one instance of each.
        """
        for _, modname, _ in pkgutil.iter_modules(tools_package.__path__, f"{tools_package.__name__}."):
            if modname.endswith(".base_tool"):
                continue
            try:
                module = __import__(modname, fromlist="dummy")
            except Exception as e:
                console.error(f"Failed to load tool module {modname}: {e}")
                continue
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, BaseTool)
                    and obj.__module__ == module.__name__
                    and not inspect.isabstract(obj)
                    and getattr(obj, "name", None)
                ):
                    instance = obj()
                    if instance.name in self.tools:
                        raise ValueError(f"Duplicate tool name: {instance.name}")
                    self.tools[instance.name] = instance
                    console.debug(f"Registered tool: '{instance.name}'")

    def has_tool(self, tool_name: str) -> bool:
        return tool_name in self.tools

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Returns the list of all tool definitions for the LLM."""
        return self._definitions

    async def execute(self, tool_name: str, arguments: Dict[str, Any], client: "BackendClient",
                      session_id: Optional[str] = None) -> Any:
        """
        Validates the arguments against the tool's schema and performs its one backend call.
        The session id, when given, travels as the correlation header of that call.

        An unknown tool name yields an error-shaped result instead of raising.
        Validation failures (pydantic.ValidationError) and backend failures
        (BackendError, httpx.HTTPError) propagate to the caller.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            console.error(f"Attempted to execute unknown tool: {tool_name}")
            return {"success": False, "error": f"Unknown tool: {tool_name}"}

        args = tool.args_schema.model_validate(arguments)
        return await tool.execute(client, args, session_id=session_id)

# Create a singleton instance for global use throughout the application.
tool_registry = ToolRegistry()
