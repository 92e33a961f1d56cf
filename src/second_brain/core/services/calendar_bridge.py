"""
Calendar Bridge.

Best-effort mirror of reminders as external calendar events. Failures
never propagate: they come back as failed outcomes and are logged.
"""

from datetime import datetime, timedelta

from second_brain.config import get_logger
from second_brain.core.entities import RemoteOutcome
from second_brain.core.exceptions import BrainError
from second_brain.core.interfaces import ICalendarProvider

logger = get_logger(__name__)

DEFAULT_EVENT_DURATION = timedelta(hours=1)


class CalendarBridge:
    """
    Maps reminder create/delete to calendar event create/delete.

    Reminders carry no duration, so every event spans a fixed window
    starting at the reminder's instant.
    """

    def __init__(
        self,
        provider: ICalendarProvider | None,
        event_duration: timedelta = DEFAULT_EVENT_DURATION,
    ) -> None:
        self._provider = provider
        self.event_duration = event_duration

    @property
    def enabled(self) -> bool:
        return self._provider is not None

    async def create_event(
        self,
        title: str,
        description: str | None,
        start: datetime,
    ) -> RemoteOutcome[str]:
        """Create an event; the outcome carries the external id on success."""
        if self._provider is None:
            return RemoteOutcome.failed("calendar sync disabled")

        end = start + self.event_duration
        try:
            event_id = await self._provider.create_event(
                summary=title,
                start=start,
                end=end,
                description=description,
            )
        except BrainError as e:
            logger.warning("calendar_create_failed", title=title, error=e.message)
            return RemoteOutcome.failed(e.message)

        return RemoteOutcome.succeeded(event_id)

    async def delete_event(self, event_id: str) -> RemoteOutcome[None]:
        """Delete an event; failure may leave an orphaned external event."""
        if self._provider is None:
            return RemoteOutcome.failed("calendar sync disabled")

        try:
            await self._provider.delete_event(event_id)
        except BrainError as e:
            logger.warning("calendar_delete_failed", event_id=event_id, error=e.message)
            return RemoteOutcome.failed(e.message)

        return RemoteOutcome.succeeded()
