# The module is to define the configuration settings for the assistant server.
# Date: 2026-10-19
# Version: 0.2.0

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the application.
    It inherits from BaseSettings, which allows it to load environment variables
    and provides type validation for the settings.
    Attributes:
        LLM_PROVIDER (str): The name of the LLM provider to use.
        OPENROUTER_API_KEY (str): API key for the OpenRouter gateway.
        OPENROUTER_MODEL (str): Model name routed through OpenRouter.
        OPENROUTER_BASE_URL (str): Base URL for the OpenRouter API.
        CHATGPT_API_KEY (str): API key for ChatGPT.
        CHATGPT_MODEL (str): Model name for ChatGPT.
        CHATGPT_BASE_URL (str): Base URL for ChatGPT API.
        DEEPSEEK_CHAT_API_KEY (str): API key for DeepSeek Chat.
        DEEPSEEK_CHAT_MODEL (str): Model name for DeepSeek Chat.
        DEEPSEEK_CHAT_BASE_URL (str): Base URL for DeepSeek Chat API.
        LLM_TEMPERATURE (float): Sampling temperature for chat turns.
        LLM_MAX_TOKENS (int): Completion token limit for chat turns.
        LLM_TIMEOUT_SECONDS (float): Timeout for a single provider call.
        BACKEND_API_URL (str): Base URL of the backend tool proxy.
        BACKEND_API_KEY (str): Shared secret sent as the x-api-key header.
        BACKEND_TIMEOUT_SECONDS (float): Timeout for a single backend call.
        MAX_TOOL_ITERATIONS (int): Maximum LLM round-trips in one turn.
        ASSISTANT_TIMEZONE (str): Timezone used when stamping the system prompt.
        REDIS_URL (str): Redis connection URL for sessions and Celery.
        SESSION_TTL_SECONDS (int): How long active session records live in Redis.
        COMPLETED_SESSION_TTL_SECONDS (int): How long completed, summarised sessions are kept.
    """
    # LLM Provider Switch
    LLM_PROVIDER: str = "OPENROUTER"

    # OPENROUTER
    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_MODEL: str = "anthropic/claude-3.5-sonnet"
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"

    # CHATGPT
    CHATGPT_API_KEY: Optional[str] = None
    CHATGPT_MODEL: str = "gpt-4o-mini"
    CHATGPT_BASE_URL: str = "https://api.openai.com/v1"

    # DEEPSEEK_CHAT
    DEEPSEEK_CHAT_API_KEY: Optional[str] = None
    DEEPSEEK_CHAT_MODEL: str = "deepseek-chat"
    DEEPSEEK_CHAT_BASE_URL: str = "https://api.deepseek.com"

    # Sampling and limits for chat turns
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1000
    LLM_TIMEOUT_SECONDS: float = 60.0

    # BACKEND_TOOL_PROXY
    BACKEND_API_URL: str = "http://localhost:8080"
    BACKEND_API_KEY: str
    BACKEND_TIMEOUT_SECONDS: float = 30.0

    # ORCHESTRATOR
    MAX_TOOL_ITERATIONS: int = 5
    ASSISTANT_TIMEZONE: str = "Europe/Stockholm"

    # REDIS
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_TTL_SECONDS: int = 86400
    COMPLETED_SESSION_TTL_SECONDS: int = 2592000


    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

# lru_cache to cache the settings instance.
@lru_cache
def get_settings():
    return Settings()


if __name__ == "__main__":
    settings = get_settings()
    print(settings.model_dump_json(indent=4, exclude={"BACKEND_API_KEY"}))
