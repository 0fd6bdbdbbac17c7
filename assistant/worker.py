# This module initializes and configures the Celery application instance.
# Date: 2026-10-19
# Version: 0.2.0

from celery import Celery
from assistant.core.config import get_settings

settings = get_settings()

# Redis serves as both broker and result backend.
celery_app = Celery(
    'assistant_tasks',
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=['assistant.tasks']
)

celery_app.conf.update(
    task_track_started=True,
    result_expires=3600,  # Expire results after 1 hour
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],
    timezone=settings.ASSISTANT_TIMEZONE,
    enable_utc=True,
)
