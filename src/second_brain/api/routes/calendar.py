"""
Calendar event endpoints.

Calendar failures are reported in the body with ``success: false``;
the HTTP status only signals malformed requests.
"""

from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError

from second_brain.api.dependencies import get_calendar_bridge
from second_brain.application.dto.requests import (
    CalendarRequest,
    CreateEventData,
    DeleteEventData,
)
from second_brain.application.dto.responses import CalendarResponse, ErrorResponse
from second_brain.core.exceptions import InvalidActionError, ValidationError
from second_brain.core.services import CalendarBridge

router = APIRouter(prefix="/api/calendar", tags=["calendar"])

CALENDAR_ACTIONS = ["createEvent", "deleteEvent"]


@router.post(
    "",
    response_model=CalendarResponse,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}},
)
async def calendar_action(
    request: CalendarRequest,
    bridge: CalendarBridge = Depends(get_calendar_bridge),
) -> CalendarResponse:
    """Create or delete a calendar event."""
    if request.action == "createEvent":
        data = _parse(CreateEventData, request.data)
        outcome = await bridge.create_event(data.title, data.description, data.date_time)
        if outcome.ok:
            return CalendarResponse(success=True, event_id=outcome.value)
        return CalendarResponse(success=False, event_id=None, error=outcome.reason)

    if request.action == "deleteEvent":
        data = _parse(DeleteEventData, request.data)
        outcome = await bridge.delete_event(data.event_id)
        if outcome.ok:
            return CalendarResponse(success=True)
        return CalendarResponse(success=False, error=outcome.reason)

    raise InvalidActionError(request.action, CALENDAR_ACTIONS)


def _parse(model, data):
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "data"
        raise ValidationError(field, error["msg"], error.get("input")) from e
