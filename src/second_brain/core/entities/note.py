"""Note entity."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from second_brain.core.entities.base import BaseRecord


class NoteCategory(str, Enum):
    """Kind of note."""

    IDEA = "idea"
    BUSINESS = "business"
    STUDY = "study"
    PERSONAL = "personal"
    TRADING = "trading"


class Note(BaseRecord):
    """Free-form note."""

    title: str
    content: str = ""
    category: NoteCategory
    tag_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
