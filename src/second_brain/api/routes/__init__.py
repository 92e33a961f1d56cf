"""API routes."""

from second_brain.api.routes.calendar import router as calendar_router
from second_brain.api.routes.dashboard import router as dashboard_router
from second_brain.api.routes.data import router as data_router
from second_brain.api.routes.drive import router as drive_router
from second_brain.api.routes.health import router as health_router
from second_brain.api.routes.reminders import router as reminders_router
from second_brain.api.routes.tags import router as tags_router

__all__ = [
    "calendar_router",
    "dashboard_router",
    "data_router",
    "drive_router",
    "health_router",
    "reminders_router",
    "tags_router",
]
