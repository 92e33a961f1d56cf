"""
Backup Snapshot Use Cases.

Build a dataset from storage and push it to the backup file store.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from second_brain.config import get_logger
from second_brain.core.entities import Dataset, EntityType
from second_brain.core.exceptions import ValidationError
from second_brain.core.interfaces.storage import IRecordStore
from second_brain.core.services.backup import BackupService

logger = get_logger(__name__)


class ExportDatasetUseCase:
    """Read every collection into one dataset snapshot."""

    def __init__(self, store: IRecordStore):
        self._store = store

    async def execute(self) -> Dataset:
        return Dataset(
            tasks=await self._store.get_all(EntityType.TASKS),
            notes=await self._store.get_all(EntityType.NOTES),
            docs=await self._store.get_all(EntityType.DOCUMENTS),
            tags=await self._store.get_all(EntityType.TAGS),
            reminders=await self._store.get_all(EntityType.REMINDERS),
        )


class SaveBackupUseCase:
    """
    Upload a snapshot.

    The client sends the dataset it holds; without one, the stored
    collections are exported instead.
    """

    def __init__(self, backup: BackupService, store: IRecordStore | None = None):
        self._backup = backup
        self._store = store

    async def execute(self, access_token: str, data: dict[str, Any] | None = None) -> str:
        if data is not None:
            try:
                dataset = Dataset.model_validate(data)
            except PydanticValidationError as e:
                error = e.errors()[0]
                field = ".".join(str(part) for part in error["loc"]) or "data"
                raise ValidationError(field, error["msg"], error.get("input")) from e
        elif self._store is not None:
            dataset = await ExportDatasetUseCase(self._store).execute()
        else:
            raise ValidationError("data", "no dataset supplied")

        return await self._backup.save_snapshot(access_token, dataset)
