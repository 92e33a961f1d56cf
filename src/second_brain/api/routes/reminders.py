"""
Reminder lifecycle endpoints.

Each change returns the reminder plus the calendar outcome, so the
client can tell a stored-but-unsynced reminder from a synced one.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from second_brain.api.dependencies import get_reminder_lifecycle
from second_brain.application.dto.responses import (
    ErrorResponse,
    OutcomeResponse,
    ReminderChangeResponse,
)
from second_brain.application.use_cases import ReminderChange, ReminderLifecycleUseCase

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _change_to_response(change: ReminderChange) -> ReminderChangeResponse:
    return ReminderChangeResponse(
        reminder=change.reminder.to_wire() if change.reminder else None,
        calendar=OutcomeResponse.from_outcome(change.calendar),
    )


@router.post(
    "",
    response_model=ReminderChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_reminder(
    body: dict[str, Any] = Body(...),
    lifecycle: ReminderLifecycleUseCase = Depends(get_reminder_lifecycle),
) -> ReminderChangeResponse:
    """Create a reminder and its calendar event."""
    return _change_to_response(await lifecycle.create(body))


@router.post(
    "/{reminder_id}/toggle",
    response_model=ReminderChangeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def toggle_reminder(
    reminder_id: str,
    lifecycle: ReminderLifecycleUseCase = Depends(get_reminder_lifecycle),
) -> ReminderChangeResponse:
    """Flip completion; completing removes the calendar event."""
    return _change_to_response(await lifecycle.toggle(reminder_id))


@router.delete("/{reminder_id}", response_model=ReminderChangeResponse)
async def delete_reminder(
    reminder_id: str,
    lifecycle: ReminderLifecycleUseCase = Depends(get_reminder_lifecycle),
) -> ReminderChangeResponse:
    """Delete a reminder and its calendar event."""
    return _change_to_response(await lifecycle.delete(reminder_id))
