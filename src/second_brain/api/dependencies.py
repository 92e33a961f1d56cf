"""
Dependency injection for FastAPI.

Long-lived components are built once in the application lifespan and
kept on ``app.state``; route handlers receive them through these
providers, which tests replace via ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from second_brain.application.use_cases import (
    DataSyncUseCase,
    ReminderLifecycleUseCase,
    SaveBackupUseCase,
)
from second_brain.core.interfaces.storage import IRecordStore
from second_brain.core.services import (
    BackupService,
    CalendarBridge,
    DashboardService,
    TagIndexService,
)
from second_brain.infrastructure.storage.sqlite import ConnectionPool


def get_pool(request: Request) -> ConnectionPool | None:
    return getattr(request.app.state, "pool", None)


def get_record_store(request: Request) -> IRecordStore:
    return request.app.state.record_store


def get_calendar_bridge(request: Request) -> CalendarBridge:
    return request.app.state.calendar_bridge


def get_backup_service(request: Request) -> BackupService:
    return request.app.state.backup_service


# Use cases


def get_data_sync(store: IRecordStore = Depends(get_record_store)) -> DataSyncUseCase:
    return DataSyncUseCase(store)


def get_reminder_lifecycle(
    store: IRecordStore = Depends(get_record_store),
    calendar: CalendarBridge = Depends(get_calendar_bridge),
) -> ReminderLifecycleUseCase:
    return ReminderLifecycleUseCase(store, calendar)


def get_save_backup(
    backup: BackupService = Depends(get_backup_service),
    store: IRecordStore = Depends(get_record_store),
) -> SaveBackupUseCase:
    return SaveBackupUseCase(backup, store)


def get_dashboard_service(store: IRecordStore = Depends(get_record_store)) -> DashboardService:
    return DashboardService(store)


def get_tag_index(store: IRecordStore = Depends(get_record_store)) -> TagIndexService:
    return TagIndexService(store)
