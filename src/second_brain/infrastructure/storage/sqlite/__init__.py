"""SQLite storage implementations."""

from second_brain.infrastructure.storage.sqlite.codec import (
    EntityCodec,
    FieldKind,
    RecordSchema,
)
from second_brain.infrastructure.storage.sqlite.connection import ConnectionPool
from second_brain.infrastructure.storage.sqlite.record_store import SQLiteRecordStore

# Type alias for convenience
RecordStore = SQLiteRecordStore

__all__ = [
    # Connection
    "ConnectionPool",
    # Codec
    "EntityCodec",
    "FieldKind",
    "RecordSchema",
    # Store classes
    "SQLiteRecordStore",
    "RecordStore",
]
