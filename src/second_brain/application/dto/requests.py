"""Request DTOs for API endpoints.

Bodies follow the web client's camelCase wire format. Record payloads
for the data endpoint are not modelled here: their shape depends on the
``type`` query parameter and is validated by the sync use case.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireRequest(BaseModel):
    """camelCase request body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarRequest(WireRequest):
    """Calendar action envelope; ``data`` is validated per action."""

    action: str | None = Field(default=None, examples=["createEvent", "deleteEvent"])
    data: dict[str, Any] = Field(default_factory=dict)


class CreateEventData(WireRequest):
    title: str = Field(..., min_length=1)
    description: str | None = None
    date_time: datetime


class DeleteEventData(WireRequest):
    event_id: str = Field(..., min_length=1)


class DriveRequest(WireRequest):
    """
    Either an authorization code to exchange, or a token plus dataset.

    ``data`` uses the snapshot keys ``tasks``, ``notes``, ``docs``,
    ``tags`` and ``reminders``.
    """

    code: str | None = None
    access_token: str | None = None
    data: dict[str, Any] | None = None
