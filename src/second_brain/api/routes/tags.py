"""
Tag index endpoints.
"""

from fastapi import APIRouter, Depends

from second_brain.api.dependencies import get_tag_index
from second_brain.application.dto.responses import TaggedItemsResponse, TagUsageResponse
from second_brain.core.services import TagIndexService

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("/usage", response_model=TagUsageResponse)
async def tag_usage(
    service: TagIndexService = Depends(get_tag_index),
) -> TagUsageResponse:
    """Reference count per tag and the number of dangling references."""
    return TagUsageResponse.from_report(await service.usage())


@router.get("/{tag_id}/items", response_model=TaggedItemsResponse)
async def tagged_items(
    tag_id: str,
    service: TagIndexService = Depends(get_tag_index),
) -> TaggedItemsResponse:
    """Every record carrying the tag, grouped by collection."""
    return TaggedItemsResponse.from_items(await service.tagged_items(tag_id))
