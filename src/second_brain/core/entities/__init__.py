"""Core domain entities."""

from second_brain.core.entities.base import BaseRecord
from second_brain.core.entities.dataset import Dataset
from second_brain.core.entities.document import Document
from second_brain.core.entities.entity_type import RECORD_CLASSES, EntityType
from second_brain.core.entities.note import Note, NoteCategory
from second_brain.core.entities.outcome import RemoteOutcome
from second_brain.core.entities.reminder import Reminder, ReminderRepeat
from second_brain.core.entities.tag import Tag
from second_brain.core.entities.task import Task, TaskCategory, TaskPriority, TaskStatus

__all__ = [
    # Records
    "BaseRecord",
    "Task",
    "TaskCategory",
    "TaskPriority",
    "TaskStatus",
    "Note",
    "NoteCategory",
    "Document",
    "Reminder",
    "ReminderRepeat",
    "Tag",
    # Collections
    "EntityType",
    "RECORD_CLASSES",
    "Dataset",
    # Integrations
    "RemoteOutcome",
]
