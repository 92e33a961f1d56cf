"""Closed set of stored collections."""

from enum import Enum

from second_brain.core.entities.base import BaseRecord
from second_brain.core.entities.document import Document
from second_brain.core.entities.note import Note
from second_brain.core.entities.reminder import Reminder
from second_brain.core.entities.tag import Tag
from second_brain.core.entities.task import Task
from second_brain.core.exceptions import InvalidTypeError


class EntityType(str, Enum):
    """
    Collection name as used on the wire and as the table name.

    Only ``parse`` accepts free-form strings; everything past the request
    boundary works with members of this enum.
    """

    TASKS = "tasks"
    NOTES = "notes"
    DOCUMENTS = "documents"
    REMINDERS = "reminders"
    TAGS = "tags"

    @classmethod
    def parse(cls, value: str | None) -> "EntityType":
        """Parse a wire value, raising InvalidTypeError for anything unknown."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidTypeError(value) from None

    @property
    def record_class(self) -> type[BaseRecord]:
        return RECORD_CLASSES[self]

    @property
    def table(self) -> str:
        return self.value


RECORD_CLASSES: dict[EntityType, type[BaseRecord]] = {
    EntityType.TASKS: Task,
    EntityType.NOTES: Note,
    EntityType.DOCUMENTS: Document,
    EntityType.REMINDERS: Reminder,
    EntityType.TAGS: Tag,
}
