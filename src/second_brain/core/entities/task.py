"""Task entity."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from second_brain.core.entities.base import BaseRecord


class TaskCategory(str, Enum):
    """Life area a task belongs to."""

    BUSINESS = "business"
    CERT = "cert"
    HEALTH = "health"
    SPANISH = "spanish"
    TRADING = "trading"
    CREATIVE = "creative"
    OTHER = "other"


class TaskPriority(str, Enum):
    """Task priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """Task workflow status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Task(BaseRecord):
    """
    Actionable item with category, priority and status.

    ``completed`` is a legacy flag kept for older clients; ``status``
    is authoritative.
    """

    title: str
    description: str | None = None
    category: TaskCategory
    priority: TaskPriority
    status: TaskStatus
    due_date: str | None = None
    tag_ids: list[str] = Field(default_factory=list)
    completed: bool | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE
