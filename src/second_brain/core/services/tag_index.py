"""
Tag Index Service.

Tag references are weak: records keep ids of tags that may have been
deleted since. Everything here skips ids it cannot resolve.
"""

from dataclasses import dataclass, field

from second_brain.core.entities import BaseRecord, EntityType, Tag
from second_brain.core.interfaces.storage import IRecordStore

TAGGABLE_TYPES = (
    EntityType.TASKS,
    EntityType.NOTES,
    EntityType.DOCUMENTS,
    EntityType.REMINDERS,
)


def resolve_tags(tag_ids: list[str], tags: list[Tag]) -> list[Tag]:
    """Known tags in reference order; unknown ids are dropped."""
    by_id = {tag.id: tag for tag in tags}
    return [by_id[tag_id] for tag_id in tag_ids if tag_id in by_id]


@dataclass
class TagUsage:
    """How many records reference a tag."""

    tag: Tag
    count: int = 0


@dataclass
class TagUsageReport:
    usage: list[TagUsage] = field(default_factory=list)
    dangling_references: int = 0


@dataclass
class TaggedItems:
    """Records of every taggable collection carrying one tag."""

    tag: Tag | None
    items: dict[EntityType, list[BaseRecord]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(records) for records in self.items.values())


class TagIndexService:
    """Cross-collection tag queries."""

    def __init__(self, store: IRecordStore) -> None:
        self._store = store

    async def tagged_items(self, tag_id: str) -> TaggedItems:
        """
        Collect records referencing ``tag_id``.

        Works for deleted tags too; ``tag`` is then None.
        """
        tag = await self._store.get_by_id(EntityType.TAGS, tag_id)
        result = TaggedItems(tag=tag)  # type: ignore[arg-type]
        for entity_type in TAGGABLE_TYPES:
            records = await self._store.get_all(entity_type)
            result.items[entity_type] = [
                r for r in records if tag_id in getattr(r, "tag_ids", [])
            ]
        return result

    async def usage(self) -> TagUsageReport:
        """Reference counts per tag plus the number of dangling references."""
        tags: list[Tag] = await self._store.get_all(EntityType.TAGS)  # type: ignore[assignment]
        counts = {tag.id: 0 for tag in tags}
        dangling = 0

        for entity_type in TAGGABLE_TYPES:
            for record in await self._store.get_all(entity_type):
                tag_ids = getattr(record, "tag_ids", [])
                for tag in resolve_tags(tag_ids, tags):
                    counts[tag.id] += 1
                dangling += sum(1 for tag_id in tag_ids if tag_id not in counts)

        return TagUsageReport(
            usage=[TagUsage(tag=tag, count=counts[tag.id]) for tag in tags],
            dangling_references=dangling,
        )
