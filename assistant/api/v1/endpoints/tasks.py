# This module provides API endpoints for interacting with background tasks.
# Date: 2026-10-19
# Version: 0.2.0

from fastapi import APIRouter
from assistant.models.api_models import TaskStatusResponse
from assistant.worker import celery_app
from celery.result import AsyncResult

router = APIRouter()

@router.get("/status/{task_id}",
            response_model=TaskStatusResponse,
            summary="Check Task Status",
            tags=["Task Management"])
def get_task_status(task_id: str):
    """
    Retrieves the status and result of a background task.
    """
    task_result = AsyncResult(task_id, app=celery_app)

    result = None
    if task_result.ready():
        if task_result.successful():
            result = task_result.get()
        else:
            # Task failed, the stored result is the exception
            result = str(task_result.result)

    return TaskStatusResponse(
        task_id=task_id,
        status=task_result.state,
        result=result
    )
