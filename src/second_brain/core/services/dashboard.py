"""
Dashboard Service.

Counters over the collections shown on the landing page.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from second_brain.core.entities import Document, EntityType, Note, Reminder, Task
from second_brain.core.interfaces.storage import IRecordStore


@dataclass
class DashboardStats:
    """Landing page counters."""

    tasks_completed: int = 0
    tasks_pending: int = 0
    notes_count: int = 0
    docs_count: int = 0
    upcoming_reminders: int = 0
    overdue_reminders: int = 0
    category_breakdown: dict[str, int] = field(default_factory=dict)


def compute_stats(
    tasks: list[Task],
    notes: list[Note],
    docs: list[Document],
    reminders: list[Reminder],
    now: datetime | None = None,
) -> DashboardStats:
    """Derive counters; the breakdown covers pending tasks only."""
    now = now or datetime.now(UTC)
    stats = DashboardStats(notes_count=len(notes), docs_count=len(docs))

    for task in tasks:
        if task.is_done:
            stats.tasks_completed += 1
            continue
        stats.tasks_pending += 1
        category = task.category.value
        stats.category_breakdown[category] = stats.category_breakdown.get(category, 0) + 1

    for reminder in reminders:
        if reminder.completed:
            continue
        if reminder.is_overdue(now):
            stats.overdue_reminders += 1
        else:
            stats.upcoming_reminders += 1

    return stats


class DashboardService:
    """Loads the collections and computes dashboard counters."""

    def __init__(self, store: IRecordStore) -> None:
        self._store = store

    async def get_stats(self, now: datetime | None = None) -> DashboardStats:
        tasks = await self._store.get_all(EntityType.TASKS)
        notes = await self._store.get_all(EntityType.NOTES)
        docs = await self._store.get_all(EntityType.DOCUMENTS)
        reminders = await self._store.get_all(EntityType.REMINDERS)
        return compute_stats(tasks, notes, docs, reminders, now)  # type: ignore[arg-type]
