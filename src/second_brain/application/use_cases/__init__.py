"""Application use cases."""

from second_brain.application.use_cases.backup_snapshot import (
    ExportDatasetUseCase,
    SaveBackupUseCase,
)
from second_brain.application.use_cases.data_sync import ACTIONS, DataSyncUseCase, validate_record
from second_brain.application.use_cases.reminder_lifecycle import (
    ReminderChange,
    ReminderLifecycleUseCase,
)

__all__ = [
    "ACTIONS",
    "DataSyncUseCase",
    "validate_record",
    "ReminderLifecycleUseCase",
    "ReminderChange",
    "ExportDatasetUseCase",
    "SaveBackupUseCase",
]
