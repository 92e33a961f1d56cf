"""Core interfaces (abstract contracts)."""

from second_brain.core.interfaces.integrations import (
    ICalendarProvider,
    IFileStore,
    IOAuthProvider,
    RemoteFile,
    TokenSet,
)
from second_brain.core.interfaces.storage import IRecordStore

__all__ = [
    # Storage
    "IRecordStore",
    # Integrations
    "IOAuthProvider",
    "ICalendarProvider",
    "IFileStore",
    "TokenSet",
    "RemoteFile",
]
