"""FastAPI dependencies resolving the shared ORM manager and task service."""

from fastapi import Request

from casework_tasks.config import Settings
from casework_tasks.database.orm_manager import ORMManager, get_orm_manager
from casework_tasks.services.service_factory import get_service_factory
from casework_tasks.services.task_service import TaskService


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> ORMManager:
    """ORM manager bound to the app's configured database URL."""
    return get_orm_manager(_settings(request).database_url)


def get_task_service(request: Request) -> TaskService:
    """Process-wide task service."""
    settings = _settings(request)
    factory = get_service_factory(
        get_database(request), case_number_start=settings.case_number_start
    )
    return factory.get_task_service()
