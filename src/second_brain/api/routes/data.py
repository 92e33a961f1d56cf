"""
Record sync endpoints used by the web client.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from second_brain.api.dependencies import get_data_sync
from second_brain.application.dto.responses import ErrorResponse, SuccessResponse
from second_brain.application.use_cases import DataSyncUseCase
from second_brain.core.entities import EntityType

router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("", response_model=None, responses={400: {"model": ErrorResponse}})
async def list_records(
    type: str | None = Query(default=None, description="Collection name"),
    id: str | None = Query(default=None, description="Return only this record"),
    use_case: DataSyncUseCase = Depends(get_data_sync),
) -> list[dict[str, Any]] | dict[str, Any] | None:
    """
    List a collection, or fetch one record.

    A missing record yields ``null``, not 404.
    """
    entity_type = EntityType.parse(type)
    result = await use_case.fetch(entity_type, id)
    if result is None:
        return None
    if isinstance(result, list):
        return [record.to_wire() for record in result]
    return result.to_wire()


@router.post(
    "",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def mutate_records(
    type: str | None = Query(default=None, description="Collection name"),
    action: str | None = Query(default=None, description="create, update, delete or sync"),
    body: Any = Body(default=None),
    use_case: DataSyncUseCase = Depends(get_data_sync),
) -> SuccessResponse:
    """Apply one sync protocol action."""
    entity_type = EntityType.parse(type)
    await use_case.execute(entity_type, action, body)
    return SuccessResponse()
