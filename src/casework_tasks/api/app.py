"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from casework_tasks import __version__
from casework_tasks.api.deps import get_task_service
from casework_tasks.api.error_handling import install_error_handling
from casework_tasks.api.middleware import RequestValidationMiddleware
from casework_tasks.api.routers import health, tasks
from casework_tasks.config import Settings, configure_logging
from casework_tasks.services.task_service import TaskService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info("Casework Tasks %s starting (debug=%s)", __version__, settings.debug)
    yield
    logger.info("Casework Tasks shutting down")


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[TaskService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Read from the environment if not provided.
        service: Task service to use instead of the process-wide one.

    Returns:
        Configured FastAPI instance with all routers registered.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Casework Tasks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    install_error_handling(app)

    app.include_router(health.router)
    app.include_router(tasks.router)

    if service is not None:
        app.dependency_overrides[get_task_service] = lambda: service

    app.add_middleware(RequestValidationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
