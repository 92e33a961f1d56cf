"""Document entity."""

from datetime import datetime

from pydantic import Field

from second_brain.core.entities.base import BaseRecord


class Document(BaseRecord):
    """
    Uploaded file kept inline.

    ``file_url`` carries the content payload itself (typically a data URI),
    not a link to external storage.
    """

    title: str
    file_name: str
    file_type: str
    file_size: int = Field(default=0, ge=0)
    file_url: str | None = None
    tag_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
