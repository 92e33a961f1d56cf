"""
Core business logic services.

Layer-pure services that depend only on:
- second_brain/core/entities/*
- second_brain/core/interfaces/*
- second_brain/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from second_brain.core.services.backup import BackupService
from second_brain.core.services.calendar_bridge import CalendarBridge
from second_brain.core.services.dashboard import DashboardService, DashboardStats, compute_stats
from second_brain.core.services.tag_index import (
    TaggedItems,
    TagIndexService,
    TagUsage,
    TagUsageReport,
    resolve_tags,
)

__all__ = [
    # Integrations
    "CalendarBridge",
    "BackupService",
    # Dashboard
    "DashboardService",
    "DashboardStats",
    "compute_stats",
    # Tags
    "TagIndexService",
    "TaggedItems",
    "TagUsage",
    "TagUsageReport",
    "resolve_tags",
]
