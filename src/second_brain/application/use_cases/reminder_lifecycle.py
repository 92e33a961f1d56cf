"""
Reminder Lifecycle Use Case.

Keeps reminders and their calendar events in step. The local change
always happens; the calendar side is reported as an outcome.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from second_brain.application.use_cases.data_sync import validate_record
from second_brain.config import get_logger
from second_brain.core.entities import EntityType, Reminder, RemoteOutcome
from second_brain.core.exceptions import RecordNotFoundError, ValidationError
from second_brain.core.interfaces.storage import IRecordStore
from second_brain.core.services.calendar_bridge import CalendarBridge

logger = get_logger(__name__)


@dataclass
class ReminderChange:
    """Reminder after the change plus what happened on the calendar side."""

    reminder: Reminder | None
    calendar: RemoteOutcome | None = None


class ReminderLifecycleUseCase:
    """Create, toggle and delete reminders with calendar coupling."""

    def __init__(self, store: IRecordStore, calendar: CalendarBridge):
        self._store = store
        self._calendar = calendar

    async def create(self, data: Any) -> ReminderChange:
        """
        Create a calendar event, then store the reminder.

        ``id`` and ``createdAt`` are filled in when the client omits them.
        A failed calendar call still stores the reminder, without an
        event id.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("body", "expected a reminder object", data)

        payload = dict(data)
        payload.setdefault("id", str(int(time.time() * 1000)))
        payload.setdefault("createdAt", datetime.now(UTC).isoformat())
        payload.pop("calendarEventId", None)
        payload.pop("calendar_event_id", None)
        reminder: Reminder = validate_record(EntityType.REMINDERS, payload)  # type: ignore[assignment]

        outcome = await self._calendar.create_event(
            reminder.title, reminder.description, reminder.date_time
        )
        if outcome.ok:
            reminder = reminder.model_copy(update={"calendar_event_id": outcome.value})

        await self._store.insert(EntityType.REMINDERS, reminder)
        logger.info(
            "reminder_created",
            reminder_id=reminder.id,
            calendar_synced=outcome.ok,
        )
        return ReminderChange(reminder=reminder, calendar=outcome)

    async def toggle(self, reminder_id: str) -> ReminderChange:
        """
        Flip completion.

        Completing a reminder removes its calendar event; reopening it
        does not recreate one.

        Raises:
            RecordNotFoundError: If no reminder has ``reminder_id``
        """
        reminder = await self._store.get_by_id(EntityType.REMINDERS, reminder_id)
        if not isinstance(reminder, Reminder):
            raise RecordNotFoundError(EntityType.REMINDERS.value, reminder_id)

        outcome: RemoteOutcome | None = None
        changes: dict[str, Any] = {"completed": not reminder.completed}
        if not reminder.completed and reminder.calendar_event_id:
            outcome = await self._calendar.delete_event(reminder.calendar_event_id)
            changes["calendar_event_id"] = None

        await self._store.update(EntityType.REMINDERS, reminder_id, changes)
        updated = reminder.model_copy(update=changes)
        logger.info("reminder_toggled", reminder_id=reminder_id, completed=updated.completed)
        return ReminderChange(reminder=updated, calendar=outcome)

    async def delete(self, reminder_id: str) -> ReminderChange:
        """Remove the calendar event when linked, then the reminder."""
        reminder = await self._store.get_by_id(EntityType.REMINDERS, reminder_id)

        outcome: RemoteOutcome | None = None
        if isinstance(reminder, Reminder) and reminder.calendar_event_id:
            outcome = await self._calendar.delete_event(reminder.calendar_event_id)

        await self._store.remove(EntityType.REMINDERS, reminder_id)
        return ReminderChange(reminder=reminder, calendar=outcome)  # type: ignore[arg-type]
