# The module is to define the API router for the assistant server.
# Date: 2026-10-19
# Version: 0.2.0

from fastapi import APIRouter
from assistant.api.v1.endpoints import session, chat, tasks

api_router = APIRouter()

# Include the session router with a '/session' prefix
api_router.include_router(session.router, prefix="/session", tags=["Session Management"])

# Include the chat router with a '/chat' prefix
api_router.include_router(chat.router, prefix="/chat", tags=["Conversation"])

# Include the tasks router with a '/tasks' prefix
api_router.include_router(tasks.router, prefix="/tasks", tags=["Task Management"])
