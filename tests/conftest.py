"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from second_brain.core.entities import (
    Document,
    Note,
    Reminder,
    Tag,
    Task,
)
from second_brain.infrastructure.storage.sqlite import ConnectionPool, SQLiteRecordStore
from second_brain.infrastructure.storage.sqlite.migrations.migrator import initialize_database

CREATED = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)
    return temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    pool = ConnectionPool(migrated_db, pool_size=2)
    yield pool
    await pool.close()


@pytest.fixture
def store(pool: ConnectionPool) -> SQLiteRecordStore:
    return SQLiteRecordStore(pool)


def _build_task(**overrides) -> Task:
    data = {
        "id": "t1",
        "title": "Buy milk",
        "category": "other",
        "priority": "medium",
        "status": "todo",
        "tag_ids": [],
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    data.update(overrides)
    return Task(**data)


def _build_note(**overrides) -> Note:
    data = {
        "id": "n1",
        "title": "Idea",
        "content": "Sell lemonade",
        "category": "idea",
        "tag_ids": [],
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    data.update(overrides)
    return Note(**data)


def _build_document(**overrides) -> Document:
    data = {
        "id": "d1",
        "title": "Passport",
        "file_name": "passport.pdf",
        "file_type": "application/pdf",
        "file_size": 2048,
        "tag_ids": [],
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    data.update(overrides)
    return Document(**data)


def _build_reminder(**overrides) -> Reminder:
    data = {
        "id": "r1",
        "title": "Call bank",
        "date_time": datetime(2025, 1, 1, 10, 0, tzinfo=UTC),
        "created_at": CREATED,
    }
    data.update(overrides)
    return Reminder(**data)


def _build_tag(**overrides) -> Tag:
    data = {"id": "g1", "name": "urgent", "color": "#ff0000"}
    data.update(overrides)
    return Tag(**data)


@pytest.fixture
def make_task():
    """Factory for valid tasks; keyword arguments override fields."""
    return _build_task


@pytest.fixture
def make_note():
    return _build_note


@pytest.fixture
def make_document():
    return _build_document


@pytest.fixture
def make_reminder():
    return _build_reminder


@pytest.fixture
def make_tag():
    return _build_tag
