"""
SQLite implementation of record storage.

One table per entity type; table and column names come from the closed
EntityType enumeration and the record schemas, never from request input.
"""

from typing import Any

import aiosqlite

from second_brain.config import get_logger
from second_brain.core.entities import BaseRecord, EntityType
from second_brain.core.exceptions import DatabaseError, DuplicateRecordError
from second_brain.core.interfaces.storage import IRecordStore
from second_brain.infrastructure.storage.sqlite.codec import EntityCodec
from second_brain.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


class SQLiteRecordStore(IRecordStore):
    """SQLite implementation of record storage."""

    def __init__(self, pool: ConnectionPool, codec: EntityCodec | None = None):
        self._pool = pool
        self._codec = codec or EntityCodec()

    @property
    def codec(self) -> EntityCodec:
        return self._codec

    async def get_all(self, entity_type: EntityType) -> list[BaseRecord]:
        """Get every record of a type in insertion order."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {entity_type.table} ORDER BY rowid"
            )
            rows = await cursor.fetchall()
        return [self._row_to_record(entity_type, row) for row in rows]

    async def get_by_id(self, entity_type: EntityType, record_id: str) -> BaseRecord | None:
        """Get record by ID."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {entity_type.table} WHERE id = ?", (record_id,)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_record(entity_type, row)

    async def insert(self, entity_type: EntityType, record: BaseRecord) -> None:
        """Insert a new record."""
        row = self._codec.encode(entity_type, record)
        async with self._pool.transaction() as conn:
            await self._insert_row(conn, entity_type, row)
        logger.info("record_inserted", type=entity_type.value, record_id=record.id)

    async def update(
        self,
        entity_type: EntityType,
        record_id: str,
        fields: dict[str, Any],
    ) -> bool:
        """Overwrite the given fields of a record; ``id`` is never rewritten."""
        changes = {k: v for k, v in fields.items() if k != "id"}
        if not changes:
            return await self.get_by_id(entity_type, record_id) is not None

        row = self._codec.encode_fields(entity_type, changes)
        assignments = ", ".join(f"{column} = ?" for column in row)

        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE {entity_type.table} SET {assignments} WHERE id = ?",
                (*row.values(), record_id),
            )
            updated = cursor.rowcount > 0

        if updated:
            logger.info(
                "record_updated",
                type=entity_type.value,
                record_id=record_id,
                fields=sorted(row),
            )
        else:
            logger.debug("record_update_no_match", type=entity_type.value, record_id=record_id)
        return updated

    async def remove(self, entity_type: EntityType, record_id: str) -> bool:
        """Delete a record by ID."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                f"DELETE FROM {entity_type.table} WHERE id = ?", (record_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("record_deleted", type=entity_type.value, record_id=record_id)
        return deleted

    async def replace_all(self, entity_type: EntityType, records: list[BaseRecord]) -> None:
        """
        Delete every record of the type, then insert ``records`` in order.

        The delete and the inserts commit separately, so a concurrent reader
        can observe an empty or partial collection in between.
        """
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateRecordError(entity_type.value, record.id)
            seen.add(record.id)

        rows = [self._codec.encode(entity_type, record) for record in records]

        async with self._pool.transaction() as conn:
            cursor = await conn.execute(f"DELETE FROM {entity_type.table}")
            removed = cursor.rowcount

        async with self._pool.transaction() as conn:
            for row in rows:
                await self._insert_row(conn, entity_type, row)

        logger.info(
            "collection_replaced",
            type=entity_type.value,
            removed=removed,
            inserted=len(rows),
        )

    async def _insert_row(
        self,
        conn: aiosqlite.Connection,
        entity_type: EntityType,
        row: dict[str, Any],
    ) -> None:
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            await conn.execute(
                f"INSERT INTO {entity_type.table} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            )
        except aiosqlite.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateRecordError(entity_type.value, str(row.get("id"))) from e
            raise DatabaseError(f"insert into {entity_type.table}", str(e)) from e

    def _row_to_record(self, entity_type: EntityType, row: aiosqlite.Row) -> BaseRecord:
        """Convert a database row to a record."""
        return self._codec.decode(entity_type, {key: row[key] for key in row.keys()})
