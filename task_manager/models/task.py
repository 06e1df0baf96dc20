"""Task model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String

from task_manager.database import Base
from task_manager.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """Task owned by a single user.

    The owner side has no relationship attribute; tasks for a user are
    looked up through ``TaskService.get_tasks_for_owner``.
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(2000), nullable=False)
    completed = Column(Boolean, nullable=False, default=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
