"""Data transfer objects between the API and the use cases."""

from second_brain.application.dto.requests import (
    CalendarRequest,
    CreateEventData,
    DeleteEventData,
    DriveRequest,
)
from second_brain.application.dto.responses import (
    AuthUrlResponse,
    CalendarResponse,
    DashboardResponse,
    DriveSaveResponse,
    DriveTokensResponse,
    ErrorResponse,
    HealthResponse,
    OutcomeResponse,
    ProviderHealthResponse,
    ReminderChangeResponse,
    SuccessResponse,
    TaggedItemsResponse,
    TagUsageResponse,
)

__all__ = [
    # Requests
    "CalendarRequest",
    "CreateEventData",
    "DeleteEventData",
    "DriveRequest",
    # Responses
    "AuthUrlResponse",
    "CalendarResponse",
    "DashboardResponse",
    "DriveSaveResponse",
    "DriveTokensResponse",
    "ErrorResponse",
    "HealthResponse",
    "OutcomeResponse",
    "ProviderHealthResponse",
    "ReminderChangeResponse",
    "SuccessResponse",
    "TaggedItemsResponse",
    "TagUsageResponse",
]
