"""Pydantic schemas for API request/response validation."""

from task_manager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from task_manager.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
