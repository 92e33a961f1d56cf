"""Full snapshot of every collection."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from second_brain.core.entities.document import Document
from second_brain.core.entities.note import Note
from second_brain.core.entities.reminder import Reminder
from second_brain.core.entities.tag import Tag
from second_brain.core.entities.task import Task


class Dataset(BaseModel):
    """
    Everything the UI holds in memory.

    Documents are keyed ``docs`` to match the snapshot files already
    written by the web client.
    """

    model_config = ConfigDict(extra="ignore")

    tasks: list[Task] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    docs: list[Document] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_wire() for t in self.tasks],
            "notes": [n.to_wire() for n in self.notes],
            "docs": [d.to_wire() for d in self.docs],
            "tags": [t.to_wire() for t in self.tags],
            "reminders": [r.to_wire() for r in self.reminders],
        }

    @property
    def total_records(self) -> int:
        return (
            len(self.tasks)
            + len(self.notes)
            + len(self.docs)
            + len(self.tags)
            + len(self.reminders)
        )
