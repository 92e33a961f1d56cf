"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Fields are
snake_case in Python and serialized camelCase, except for the error
and health bodies which keep snake_case keys.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from second_brain.core.entities import RemoteOutcome
from second_brain.core.services import DashboardStats, TaggedItems, TagUsageReport


class WireResponse(BaseModel):
    """camelCase response body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(WireResponse):
    success: bool = True


class CalendarResponse(WireResponse):
    """
    Outcome of a calendar action.

    ``success`` mirrors the remote outcome; the HTTP status stays 200.
    """

    success: bool
    event_id: str | None = None
    error: str | None = None


class DriveTokensResponse(WireResponse):
    tokens: dict[str, Any]


class DriveSaveResponse(WireResponse):
    success: bool = True
    file_id: str


class AuthUrlResponse(WireResponse):
    url: str


class OutcomeResponse(WireResponse):
    ok: bool
    value: Any = None
    reason: str | None = None

    @classmethod
    def from_outcome(cls, outcome: RemoteOutcome | None) -> "OutcomeResponse | None":
        if outcome is None:
            return None
        return cls(ok=outcome.ok, value=outcome.value, reason=outcome.reason)


class ReminderChangeResponse(WireResponse):
    """Reminder after a lifecycle change and the calendar outcome, if any."""

    reminder: dict[str, Any] | None = None
    calendar: OutcomeResponse | None = None


class DashboardResponse(WireResponse):
    tasks_completed: int
    tasks_pending: int
    notes_count: int
    docs_count: int
    upcoming_reminders: int
    overdue_reminders: int
    category_breakdown: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "DashboardResponse":
        return cls(
            tasks_completed=stats.tasks_completed,
            tasks_pending=stats.tasks_pending,
            notes_count=stats.notes_count,
            docs_count=stats.docs_count,
            upcoming_reminders=stats.upcoming_reminders,
            overdue_reminders=stats.overdue_reminders,
            category_breakdown=stats.category_breakdown,
        )


class TagUsageItem(WireResponse):
    tag: dict[str, Any]
    count: int


class TagUsageResponse(WireResponse):
    usage: list[TagUsageItem] = Field(default_factory=list)
    dangling_references: int = 0

    @classmethod
    def from_report(cls, report: TagUsageReport) -> "TagUsageResponse":
        return cls(
            usage=[TagUsageItem(tag=u.tag.to_wire(), count=u.count) for u in report.usage],
            dangling_references=report.dangling_references,
        )


class TaggedItemsResponse(WireResponse):
    tag: dict[str, Any] | None = None
    items: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)
    total: int = 0

    @classmethod
    def from_items(cls, tagged: TaggedItems) -> "TaggedItemsResponse":
        return cls(
            tag=tagged.tag.to_wire() if tagged.tag else None,
            items={
                entity_type.value: [r.to_wire() for r in records]
                for entity_type, records in tagged.items.items()
            },
            total=tagged.total,
        )


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    calendar_sync: bool | None = None
    backup_configured: bool | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error: human-readable description (the web client displays it)
    - error_code: machine-readable code (e.g. INVALID_TYPE)
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error: str = Field(..., description="Human-readable error description")
    error_code: str = Field(..., description="Machine-readable error code")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
