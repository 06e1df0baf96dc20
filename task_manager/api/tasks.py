"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from task_manager.api.dependencies import get_current_user, get_task_service
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from task_manager.services.tasks import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def get_user_task(tasks: TaskService, task_id: int, user: User) -> Task:
    """Get a task owned by the user or raise 404."""
    task = tasks.get_task(task_id, user.id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task."""
    return tasks.create_task(current_user.id, task_data.description, task_data.completed)


@router.get("", response_model=list[TaskResponse])
async def get_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
    completed: bool | None = None,
):
    """Get the current user's tasks."""
    return tasks.get_tasks_for_owner(current_user.id, completed=completed)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    return get_user_task(tasks, task_id, current_user)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task."""
    task = get_user_task(tasks, task_id, current_user)
    changes = {**task_data.model_dump(exclude_unset=True), **(task_data.model_extra or {})}
    return tasks.update_task(task, **changes)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    task = get_user_task(tasks, task_id, current_user)
    tasks.delete_task(task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
