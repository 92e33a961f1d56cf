"""
Dashboard endpoint.
"""

from fastapi import APIRouter, Depends

from second_brain.api.dependencies import get_dashboard_service
from second_brain.application.dto.responses import DashboardResponse
from second_brain.core.services import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    return DashboardResponse.from_stats(await service.get_stats())
