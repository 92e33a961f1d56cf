"""
Abstract interface for record storage.

Defines the contract every backing store for the five collections fulfils.
"""

from abc import ABC, abstractmethod
from typing import Any

from second_brain.core.entities import BaseRecord, EntityType


class IRecordStore(ABC):
    """
    Abstract interface for collection storage keyed by entity type.

    Records are returned decoded; encoding to the storage representation is
    the implementation's concern.
    """

    @abstractmethod
    async def get_all(self, entity_type: EntityType) -> list[BaseRecord]:
        """Get every record of a type in insertion order."""
        pass

    @abstractmethod
    async def get_by_id(self, entity_type: EntityType, record_id: str) -> BaseRecord | None:
        """Get record by ID, or None when absent."""
        pass

    @abstractmethod
    async def insert(self, entity_type: EntityType, record: BaseRecord) -> None:
        """Insert a new record."""
        pass

    @abstractmethod
    async def update(
        self,
        entity_type: EntityType,
        record_id: str,
        fields: dict[str, Any],
    ) -> bool:
        """Overwrite the given fields. Returns False when no record matched."""
        pass

    @abstractmethod
    async def remove(self, entity_type: EntityType, record_id: str) -> bool:
        """Delete a record. Returns False when no record matched."""
        pass

    @abstractmethod
    async def replace_all(self, entity_type: EntityType, records: list[BaseRecord]) -> None:
        """
        Replace the whole collection.

        Not isolated: readers may see an empty or partial collection while
        this runs.
        """
        pass
