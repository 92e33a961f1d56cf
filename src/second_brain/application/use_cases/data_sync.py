"""
Data Sync Use Case.

Server side of the UI's persistence protocol: list, create, update,
delete and whole-collection sync against the record store.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from second_brain.config import get_logger
from second_brain.core.entities import BaseRecord, EntityType
from second_brain.core.exceptions import (
    DuplicateRecordError,
    InvalidActionError,
    MissingIdError,
    ValidationError,
)
from second_brain.core.interfaces.storage import IRecordStore

logger = get_logger(__name__)

ACTIONS = ["create", "update", "delete", "sync"]


def validate_record(entity_type: EntityType, data: Any) -> BaseRecord:
    """
    Validate a complete wire record.

    Raises:
        ValidationError: If ``data`` is not an object or misses/breaks a field
    """
    if not isinstance(data, Mapping):
        raise ValidationError("body", f"expected a {entity_type.value} record object", data)
    try:
        return entity_type.record_class.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "body"
        raise ValidationError(field, error["msg"], error.get("input")) from e


class DataSyncUseCase:
    """
    Dispatches sync protocol actions to the record store.

    Every operation validates its whole input before touching the store,
    so a rejected request leaves storage unchanged.
    """

    def __init__(self, store: IRecordStore):
        self._store = store

    async def fetch(
        self,
        entity_type: EntityType,
        record_id: str | None = None,
    ) -> list[BaseRecord] | BaseRecord | None:
        """All records of a type, or one record (None when absent)."""
        if record_id:
            return await self._store.get_by_id(entity_type, record_id)
        return await self._store.get_all(entity_type)

    async def execute(self, entity_type: EntityType, action: str | None, body: Any) -> None:
        """
        Run a mutating action.

        Raises:
            InvalidActionError: If ``action`` is not one of ACTIONS
        """
        if action == "create":
            await self.create(entity_type, body)
        elif action == "update":
            await self.update(entity_type, body)
        elif action == "delete":
            await self.delete(entity_type, body)
        elif action == "sync":
            await self.sync(entity_type, body)
        else:
            raise InvalidActionError(action, ACTIONS)

    async def create(self, entity_type: EntityType, body: Any) -> BaseRecord:
        record = validate_record(entity_type, body)
        await self._store.insert(entity_type, record)
        return record

    async def update(self, entity_type: EntityType, body: Any) -> bool:
        """
        Overwrite the supplied fields of an existing record.

        Returns False when no record has the id; that is not an error.
        """
        record_id = self._require_id(entity_type, body, "update")
        fields = entity_type.record_class.validate_fields(
            {k: v for k, v in body.items() if k != "id"}
        )
        if "updated_at" in entity_type.record_class.model_fields and "updated_at" not in fields:
            fields["updated_at"] = datetime.now(UTC)
        return await self._store.update(entity_type, record_id, fields)

    async def delete(self, entity_type: EntityType, body: Any) -> bool:
        record_id = self._require_id(entity_type, body, "delete")
        return await self._store.remove(entity_type, record_id)

    async def sync(self, entity_type: EntityType, body: Any) -> list[BaseRecord]:
        """Replace the whole collection with the client's snapshot."""
        if not isinstance(body, list):
            raise ValidationError("body", "sync expects an array of records", type(body).__name__)

        records = [validate_record(entity_type, item) for item in body]

        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateRecordError(entity_type.value, record.id)
            seen.add(record.id)

        await self._store.replace_all(entity_type, records)
        logger.info("collection_synced", type=entity_type.value, count=len(records))
        return records

    @staticmethod
    def _require_id(entity_type: EntityType, body: Any, action: str) -> str:
        if not isinstance(body, Mapping):
            raise MissingIdError(entity_type.value, action)
        record_id = body.get("id")
        if not isinstance(record_id, str) or not record_id:
            raise MissingIdError(entity_type.value, action)
        return record_id
