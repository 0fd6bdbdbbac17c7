"""Shared fixtures for all tests."""

import json
import os
from datetime import datetime, timezone

# Settings are read at import time by several modules.
os.environ.setdefault("BACKEND_API_KEY", "test-backend-key")
os.environ.setdefault("BACKEND_API_URL", "http://backend.test")
os.environ.setdefault("OPENROUTER_API_KEY", "test-openrouter-key")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import httpx
import pytest

from assistant.models.common import FunctionCall, Message, ToolCall
from assistant.services.backend_client import BackendClient


def tool_call(call_id: str, name: str, arguments=None) -> ToolCall:
    if arguments is None:
        arguments = {}
    if isinstance(arguments, dict):
        arguments = json.dumps(arguments)
    return ToolCall(id=call_id, function=FunctionCall(name=name, arguments=arguments))


def assistant_requesting(*calls: ToolCall) -> Message:
    return Message(role="assistant", content=None, tool_calls=list(calls))


def assistant_reply(text: str) -> Message:
    return Message(role="assistant", content=text)


class RecordingBackend:
    """A MockTransport handler that records every request and answers from a route table."""

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default if default is not None else {"success": True}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get(request.url.path, self.default)
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    def client(self) -> BackendClient:
        return BackendClient("http://backend.test", "test-backend-key", transport=httpx.MockTransport(self))

    def json_bodies(self):
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_now):
    return lambda: fixed_now
