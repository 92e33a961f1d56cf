"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from second_brain import __version__
from second_brain.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from second_brain.api.middleware.error_handler import setup_exception_handlers
from second_brain.api.routes import (
    calendar_router,
    dashboard_router,
    data_router,
    drive_router,
    health_router,
    reminders_router,
    tags_router,
)
from second_brain.config import Settings, configure_logging, get_logger, get_settings
from second_brain.core.services import BackupService, CalendarBridge
from second_brain.infrastructure.google import (
    GoogleCalendarClient,
    GoogleDriveClient,
    GoogleOAuthClient,
)
from second_brain.infrastructure.storage.sqlite import ConnectionPool, SQLiteRecordStore
from second_brain.infrastructure.storage.sqlite.migrations.migrator import run_migrations

logger = get_logger(__name__)


def wire_services(app: FastAPI, settings: Settings, pool: ConnectionPool) -> None:
    """Build the long-lived components and attach them to ``app.state``."""
    oauth = GoogleOAuthClient(settings.google)

    calendar_provider = None
    if settings.calendar.enabled:
        calendar_provider = GoogleCalendarClient(oauth, settings.calendar)

    app.state.pool = pool
    app.state.record_store = SQLiteRecordStore(pool)
    app.state.calendar_bridge = CalendarBridge(
        calendar_provider,
        event_duration=timedelta(minutes=settings.calendar.event_duration_minutes),
    )
    app.state.backup_service = BackupService(
        oauth,
        GoogleDriveClient(settings.backup),
        file_name=settings.backup.file_name,
    )
    app.state.backup_configured = settings.google.is_configured


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, opens the pool and wires services on startup;
    closes the pool on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        await run_migrations(settings.storage.db_path)
        logger.info("database_initialized")

        pool = ConnectionPool.from_settings(settings)
        await pool.initialize()
        logger.info("connection_pool_ready")
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    wire_services(app, settings, pool)

    if not settings.google.is_configured:
        logger.warning("google_oauth_not_configured")

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        await pool.close()
    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Second Brain API",
        description="Personal tasks, notes, documents and reminders with calendar and Drive sync",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(data_router)
    app.include_router(calendar_router)
    app.include_router(drive_router)
    app.include_router(reminders_router)
    app.include_router(dashboard_router)
    app.include_router(tags_router)

    # Root health endpoint (for docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "second_brain.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
