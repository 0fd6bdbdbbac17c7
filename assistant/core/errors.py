# The module defines the exception hierarchy shared by the orchestrator,
# the LLM connector and the backend client.
# Date: 2026-10-19
# Version: 0.1.0

from typing import Optional


class AssistantError(Exception):
    """Base class for every failure the HTTP layer knows how to report."""
    pass


class EmptyMessageError(AssistantError):
    """The user message was missing or blank after trimming."""

    def __init__(self):
        super().__init__("Message is required")


class LLMProviderError(AssistantError):
    """The chat-completions call failed or returned an unusable response. Fatal to the turn."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        text = self.args[0]
        if self.status_code is not None:
            text = f"{text} (status {self.status_code})"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text


class IterationLimitError(AssistantError):
    """The model kept requesting tools for every allowed round-trip."""

    def __init__(self, max_iterations: int, tool_calls_used: int):
        super().__init__(
            f"Tool-call loop did not finish within {max_iterations} iterations "
            f"({tool_calls_used} tool calls made)"
        )
        self.max_iterations = max_iterations
        self.tool_calls_used = tool_calls_used


class BackendError(AssistantError):
    """The backend tool proxy answered with a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str):
        super().__init__(f"Backend error: {reason} - {body}")
        self.status_code = status_code
        self.reason = reason
        self.body = body
