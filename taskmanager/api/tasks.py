"""Task API endpoints.

All routes require a session; the task service they receive is already
scoped to the authenticated user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskmanager.api.dependencies import get_task_service
from taskmanager.schemas.auth import MessageResponse
from taskmanager.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from taskmanager.services.tasks import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=TaskListResponse)
def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    priority: Annotated[str | None, Query()] = None,
    sort: Annotated[str | None, Query(description="newest, oldest, dueDate or priority")] = None,
):
    """Get the user's tasks, optionally filtered and sorted."""
    tasks = service.list_tasks(status=status_filter, priority=priority, sort=sort)
    return TaskListResponse(
        count=len(tasks),
        tasks=[TaskResponse.model_validate(task) for task in tasks],
    )


@router.get("/filter/{task_status}", response_model=TaskListResponse)
def filter_tasks(
    task_status: str,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get the user's tasks with the given status, newest first."""
    tasks = service.filter_by_status(task_status)
    return TaskListResponse(
        count=len(tasks),
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        message="Tasks filtered successfully",
    )


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: str,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    task = service.get_task(task_id)
    return TaskEnvelope(task=TaskResponse.model_validate(task))


@router.post("/create", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task."""
    task = service.create_task(task_data)
    return TaskEnvelope(
        message="Task created successfully",
        task=TaskResponse.model_validate(task),
    )


@router.put("/update/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update some fields of a task."""
    task = service.update_task(task_id, task_data)
    return TaskEnvelope(
        message="Task updated successfully",
        task=TaskResponse.model_validate(task),
    )


@router.delete("/delete/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")
