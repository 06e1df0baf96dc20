"""SQLAlchemy models."""

from task_manager.models.task import Task
from task_manager.models.user import User, UserToken

__all__ = [
    "User",
    "UserToken",
    "Task",
]
