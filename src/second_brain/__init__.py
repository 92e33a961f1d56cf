"""Second Brain: personal tasks, notes, documents, reminders and tags."""

__version__ = "1.0.0"
