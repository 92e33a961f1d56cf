"""Tag entity."""

from second_brain.core.entities.base import BaseRecord


class Tag(BaseRecord):
    """Label other records reference by id."""

    name: str
    color: str
