"""Tests for ReminderLifecycleUseCase calendar coupling."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from second_brain.application.use_cases import ReminderLifecycleUseCase
from second_brain.config.settings import CalendarSettings
from second_brain.core.entities import EntityType, RemoteOutcome
from second_brain.core.exceptions import RecordNotFoundError, ValidationError
from second_brain.core.services import CalendarBridge
from second_brain.infrastructure.google import GoogleCalendarClient

REMINDER_WIRE = {
    "id": "r1",
    "title": "Call bank",
    "description": "About the loan",
    "dateTime": "2025-01-01T10:00:00Z",
    "repeat": "none",
    "completed": False,
    "tagIds": [],
    "createdAt": "2024-12-31T09:00:00Z",
}


@pytest.fixture
def calendar():
    calendar = AsyncMock()
    calendar.create_event.return_value = RemoteOutcome.succeeded("evt-1")
    calendar.delete_event.return_value = RemoteOutcome.succeeded()
    return calendar


@pytest.fixture
def lifecycle(store, calendar) -> ReminderLifecycleUseCase:
    return ReminderLifecycleUseCase(store, calendar)


class TestCreate:
    async def test_attaches_event_id(self, lifecycle, store, calendar):
        change = await lifecycle.create(REMINDER_WIRE)

        assert change.reminder.calendar_event_id == "evt-1"
        assert change.calendar.ok is True
        stored = await store.get_by_id(EntityType.REMINDERS, "r1")
        assert stored.calendar_event_id == "evt-1"
        title, description, start = calendar.create_event.await_args.args
        assert (title, description) == ("Call bank", "About the loan")
        assert start.isoformat() == "2025-01-01T10:00:00+00:00"

    async def test_calendar_failure_still_stores(self, lifecycle, store, calendar):
        calendar.create_event.return_value = RemoteOutcome.failed("HTTP 500")

        change = await lifecycle.create(REMINDER_WIRE)

        assert change.calendar.ok is False
        stored = await store.get_by_id(EntityType.REMINDERS, "r1")
        assert stored is not None
        assert stored.calendar_event_id is None

    async def test_unreadable_calendar_response_still_stores(self, store):
        mock_client = AsyncMock()
        mock_client.request.return_value = httpx.Response(200, text="<html>proxy error</html>")
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        bridge = CalendarBridge(
            GoogleCalendarClient(AsyncMock(), CalendarSettings(access_token="static"))
        )

        with patch(
            "second_brain.infrastructure.google.calendar_api.httpx.AsyncClient",
            return_value=mock_client,
        ):
            change = await ReminderLifecycleUseCase(store, bridge).create(
                {"id": "r1", "title": "x", "dateTime": "2025-01-01T10:00:00Z"}
            )

        assert change.calendar.ok is False
        assert "invalid JSON" in change.calendar.reason
        stored = await store.get_by_id(EntityType.REMINDERS, "r1")
        assert stored is not None
        assert stored.calendar_event_id is None

    async def test_fills_id_and_created_at(self, lifecycle):
        body = {"title": "Stretch", "dateTime": "2025-01-01T10:00:00Z"}

        change = await lifecycle.create(body)

        assert change.reminder.id
        assert change.reminder.created_at is not None

    async def test_client_event_id_ignored(self, lifecycle, calendar):
        calendar.create_event.return_value = RemoteOutcome.failed("down")

        change = await lifecycle.create(dict(REMINDER_WIRE, calendarEventId="forged"))

        assert change.reminder.calendar_event_id is None

    async def test_invalid_body(self, lifecycle, calendar):
        with pytest.raises(ValidationError):
            await lifecycle.create({"title": "no date"})
        calendar.create_event.assert_not_awaited()


class TestToggle:
    async def test_completing_linked_reminder_deletes_event_once(
        self, lifecycle, store, calendar, make_reminder
    ):
        await store.insert(EntityType.REMINDERS, make_reminder(calendar_event_id="evt-1"))

        change = await lifecycle.toggle("r1")

        calendar.delete_event.assert_awaited_once_with("evt-1")
        assert change.reminder.completed is True
        assert change.reminder.calendar_event_id is None
        stored = await store.get_by_id(EntityType.REMINDERS, "r1")
        assert stored.completed is True
        assert stored.calendar_event_id is None

    async def test_completing_unlinked_reminder_makes_no_call(
        self, lifecycle, store, calendar, make_reminder
    ):
        await store.insert(EntityType.REMINDERS, make_reminder())

        change = await lifecycle.toggle("r1")

        calendar.delete_event.assert_not_awaited()
        assert change.calendar is None
        assert change.reminder.completed is True

    async def test_reopening_makes_no_call(self, lifecycle, store, calendar, make_reminder):
        await store.insert(
            EntityType.REMINDERS, make_reminder(completed=True, calendar_event_id="evt-1")
        )

        change = await lifecycle.toggle("r1")

        calendar.delete_event.assert_not_awaited()
        assert change.reminder.completed is False

    async def test_delete_failure_still_toggles(
        self, lifecycle, store, calendar, make_reminder
    ):
        calendar.delete_event.return_value = RemoteOutcome.failed("timeout")
        await store.insert(EntityType.REMINDERS, make_reminder(calendar_event_id="evt-1"))

        change = await lifecycle.toggle("r1")

        assert change.calendar.ok is False
        assert (await store.get_by_id(EntityType.REMINDERS, "r1")).completed is True

    async def test_unknown_id(self, lifecycle):
        with pytest.raises(RecordNotFoundError):
            await lifecycle.toggle("ghost")


class TestDelete:
    async def test_linked_reminder(self, lifecycle, store, calendar, make_reminder):
        await store.insert(EntityType.REMINDERS, make_reminder(calendar_event_id="evt-1"))

        change = await lifecycle.delete("r1")

        calendar.delete_event.assert_awaited_once_with("evt-1")
        assert change.calendar.ok is True
        assert await store.get_all(EntityType.REMINDERS) == []

    async def test_calendar_failure_still_removes(
        self, lifecycle, store, calendar, make_reminder
    ):
        calendar.delete_event.return_value = RemoteOutcome.failed("HTTP 500")
        await store.insert(EntityType.REMINDERS, make_reminder(calendar_event_id="evt-1"))

        await lifecycle.delete("r1")

        assert await store.get_all(EntityType.REMINDERS) == []

    async def test_unknown_id_is_noop(self, lifecycle, calendar):
        change = await lifecycle.delete("ghost")

        assert change.reminder is None
        assert change.calendar is None
        calendar.delete_event.assert_not_awaited()
