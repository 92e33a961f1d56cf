"""Reminder entity with optional calendar event link."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field

from second_brain.core.entities.base import BaseRecord


class ReminderRepeat(str, Enum):
    """Recurrence of a reminder."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Reminder(BaseRecord):
    """
    Reminder due at an instant.

    ``calendar_event_id`` is set only while a matching external calendar
    event is believed to exist.
    """

    title: str
    description: str | None = None
    date_time: datetime
    repeat: ReminderRepeat = ReminderRepeat.NONE
    completed: bool = False
    tag_ids: list[str] = Field(default_factory=list)
    calendar_event_id: str | None = None
    created_at: datetime

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Check if the reminder is past due and not completed."""
        if self.completed:
            return False
        now = now or datetime.now(UTC)
        due = self.date_time
        if due.tzinfo is None:
            due = due.replace(tzinfo=UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return due < now
