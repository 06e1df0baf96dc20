"""Task store operations."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from task_manager.errors import PersistenceError, ValidationError
from task_manager.models.task import Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"description", "completed"}


def normalize_description(value: str | None) -> str:
    """Trim a task description and reject empty ones."""
    description = (value or "").strip()
    if not description:
        raise ValidationError("Task description is required")
    return description


class TaskService:
    """Service for task-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_task(self, owner_id: int, description: str, completed: bool = False) -> Task:
        """Create a task owned by the given user."""
        task = Task(
            description=normalize_description(description),
            completed=completed,
            owner_id=owner_id,
        )
        self.db.add(task)
        self._commit()
        self.db.refresh(task)
        return task

    def get_tasks_for_owner(self, owner_id: int, completed: bool | None = None) -> list[Task]:
        """Get all tasks owned by a user, optionally filtered by completion."""
        query = self.db.query(Task).filter(Task.owner_id == owner_id)
        if completed is not None:
            query = query.filter(Task.completed == completed)
        return query.order_by(Task.id).all()

    def get_task(self, task_id: int, owner_id: int) -> Task | None:
        """Get a task if it belongs to the given owner."""
        return self.db.query(Task).filter(Task.id == task_id, Task.owner_id == owner_id).first()

    def update_task(self, task: Task, **changes) -> Task:
        """Apply changes to a task and persist it."""
        invalid = set(changes) - UPDATABLE_FIELDS
        if invalid:
            raise ValidationError("Invalid updates!")

        if "description" in changes:
            task.description = normalize_description(changes["description"])
        if "completed" in changes:
            task.completed = bool(changes["completed"])

        self._commit()
        self.db.refresh(task)
        return task

    def delete_task(self, task: Task) -> None:
        """Delete a single task."""
        self.db.delete(task)
        self._commit()

    def delete_tasks_for_owner(self, owner_id: int) -> int:
        """Bulk delete every task owned by a user.

        Does not commit; the caller owns the transaction.
        """
        deleted = (
            self.db.query(Task)
            .filter(Task.owner_id == owner_id)
            .delete(synchronize_session=False)
        )
        logger.info(f"Deleted {deleted} tasks for user {owner_id}")
        return deleted

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to persist task changes: {e}")
            raise PersistenceError("Unable to save task") from e
