# This module connects the orchestrator to an OpenAI-compatible chat-completions provider.
# Date: 2026-10-19
# Version: 0.2.0

from functools import lru_cache
from openai import AsyncOpenAI, APIConnectionError, APIStatusError, APITimeoutError
from typing import List, Optional, Dict, Any
from pydantic import ValidationError
from assistant.core.config import get_settings
from assistant.core.errors import LLMProviderError
from assistant.models.common import Message
from assistant.utils.logger import console


def _provider_config(provider: str) -> Dict[str, Optional[str]]:
    settings = get_settings()
    configs = {
        "OPENROUTER": {
            "api_key": settings.OPENROUTER_API_KEY,
            "base_url": settings.OPENROUTER_BASE_URL,
            "model": settings.OPENROUTER_MODEL,
        },
        "CHATGPT": {
            "api_key": settings.CHATGPT_API_KEY,
            "base_url": settings.CHATGPT_BASE_URL,
            "model": settings.CHATGPT_MODEL,
        },
        "DEEPSEEK_CHAT": {
            "api_key": settings.DEEPSEEK_CHAT_API_KEY,
            "base_url": settings.DEEPSEEK_CHAT_BASE_URL,
            "model": settings.DEEPSEEK_CHAT_MODEL,
        },
    }
    config = configs.get(provider)
    if not config or not config["api_key"]:
        raise ValueError(f"Unsupported or misconfigured LLM provider: {provider}")
    return config


@lru_cache
def get_llm_client_and_model() -> tuple[AsyncOpenAI, str]:
    """
    Acts as a factory to get the currently configured LLM client and model name.

    This function reads the LLM_PROVIDER from the settings and builds the matching
    async client once; later calls reuse it.

    Raises:
        ValueError: If the configured LLM_PROVIDER is not supported or has no API key.

    Returns:
        A tuple containing the active AsyncOpenAI client and the model name.
    """
    settings = get_settings()
    config = _provider_config(settings.LLM_PROVIDER)
    client = AsyncOpenAI(
        api_key=config["api_key"],
        base_url=config["base_url"],
        timeout=settings.LLM_TIMEOUT_SECONDS,
        max_retries=0,
    )
    return client, config["model"]


async def call_llm(messages: List[Dict[str, Any]],
                   tools: Optional[List[Dict[str, Any]]] = None,
                   temperature: Optional[float] = None,
                   max_tokens: Optional[int] = None) -> Message:
    """
    Sends one chat-completions request and returns the assistant message.

    Raises:
        LLMProviderError: On a non-success status, a timeout, a connection failure,
            or a response without a usable first choice. Never retried here.
    """
    settings = get_settings()
    try:
        client, model = get_llm_client_and_model()
    except ValueError as e:
        raise LLMProviderError("LLM provider is not configured", detail=str(e)) from e

    request_params: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": settings.LLM_TEMPERATURE if temperature is None else temperature,
        "max_tokens": settings.LLM_MAX_TOKENS if max_tokens is None else max_tokens,
    }
    if tools:
        request_params["tools"] = tools
        request_params["tool_choice"] = "auto"

    try:
        response = await client.chat.completions.create(**request_params)
    except APIStatusError as e:
        message = str(e.body) if e.body is not None else e.message
        if isinstance(e.body, dict):
            message = e.body.get("message", message)
        console.error(f"LLM provider returned status {e.status_code}: {message}")
        raise LLMProviderError("LLM provider error", status_code=e.status_code, detail=message) from e
    except APITimeoutError as e:
        console.error("LLM provider call timed out.")
        raise LLMProviderError("LLM provider timed out", detail=str(e)) from e
    except APIConnectionError as e:
        console.error(f"Could not reach the LLM provider: {e}")
        raise LLMProviderError("LLM provider unreachable", detail=str(e)) from e

    if not response.choices:
        console.error("LLM provider response has no choices.")
        raise LLMProviderError("Invalid LLM provider response", detail="missing choices[0]")

    try:
        return Message.model_validate(response.choices[0].message.model_dump())
    except ValidationError as e:
        raise LLMProviderError("Invalid LLM provider response", detail=str(e)) from e
