# The module is to define the base classes for all backend tools.
# Date: 2026-10-19
# Version: 0.2.0

from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.json_schema import SkipJsonSchema
from typing import Any, Dict, Optional, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from assistant.services.backend_client import BackendClient


class ToolInput(BaseModel):
    """
    Base input model for every tool.

    Unknown keys sent by the model are ignored. The session id is merged in by the
    orchestrator under the 'sessionId' key; it is hidden from the schema shown to
    the model and excluded from passthrough payloads. Whatever value arrives there
    is coerced to a string, so an odd value from the model never rejects the call.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    session_id: SkipJsonSchema[Optional[str]] = Field(default=None, alias="sessionId", exclude=True)

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_session_id(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    This class defines a standard interface that all tools must implement.
    Attributes:
        name (str): The name of the tool, used for identification.
        description (str): A brief description of what the tool does.
        args_schema (Type[ToolInput]): A Pydantic model defining the arguments
            that the tool accepts, which will be validated before execution.
    """
    name: str
    description: str
    args_schema: Type[ToolInput]

    @abstractmethod
    async def execute(self, client: "BackendClient", args: ToolInput,
                      session_id: Optional[str] = None) -> Any:
        """
        The core logic of the tool. This method must be implemented by all subclasses.

        Args:
            client: The backend client used to reach the tool proxy.
            args: The arguments for the tool, already validated against args_schema.
            session_id: The server-side session of the turn, sent as the correlation header.

        Returns:
            The JSON-serializable result of the tool's execution.
        """
        pass

    def get_definition(self) -> Dict[str, Any]:
        """
        Returns the tool's definition in a format compliant with OpenAI's
        function-calling format. This method is inherited by all tools.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_schema.model_json_schema(by_alias=True)
            }
        }


class BackendTool(BaseTool):
    """
    A tool that maps to exactly one backend call: a fixed method and path plus a
    projection of the validated arguments. GET tools send the projection as query
    parameters; every other method sends it as the JSON body.
    """
    method: str = "GET"
    path: str

    def build_payload(self, args: ToolInput) -> Optional[Dict[str, Any]]:
        """Default projection: pass every supplied argument through under its wire name."""
        return args.model_dump(by_alias=True, exclude_none=True)

    async def execute(self, client: "BackendClient", args: ToolInput,
                      session_id: Optional[str] = None) -> Any:
        payload = self.build_payload(args)
        if self.method == "GET":
            return await client.request("GET", self.path, params=payload, session_id=session_id)
        return await client.request(self.method, self.path, json=payload, session_id=session_id)


class NoArgsInput(ToolInput):
    """Input model for tools that take no arguments."""
    pass


class NoArgsBackendTool(BackendTool):
    """A backend tool whose call carries neither query nor body."""
    args_schema: Type[ToolInput] = NoArgsInput

    def build_payload(self, args: ToolInput) -> Optional[Dict[str, Any]]:
        return None
