"""Pytest configuration and fixtures."""

import contextlib
import os
import shutil
import tempfile
from datetime import timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from casework_tasks.api.app import create_app
from casework_tasks.config import Settings
from casework_tasks.database.orm_manager import ORMManager, reset_orm_manager
from casework_tasks.domain.entities.task import utc_now
from casework_tasks.services.service_factory import reset_service_factory

_ENV_VARS = (
    "CASEWORK_DB_PATH",
    "CASEWORK_DATABASE_URL",
    "CASEWORK_HOST",
    "CASEWORK_PORT",
    "CASEWORK_LOG_LEVEL",
    "CASEWORK_DEBUG",
    "CASEWORK_CORS_ORIGINS",
    "CASEWORK_CASE_NUMBER_START",
)


@pytest.fixture(scope="function", autouse=True)
def reset_singletons():
    """Reset singletons and set up test database before each test."""
    # Create a unique temp database for this test
    tmpdir = tempfile.mkdtemp()
    db_path = os.path.join(tmpdir, "test.db")

    # Store old env vars
    saved = {name: os.environ.get(name) for name in _ENV_VARS}

    # Set env var BEFORE resetting singletons
    os.environ["CASEWORK_DB_PATH"] = db_path
    for name in _ENV_VARS[1:]:
        os.environ.pop(name, None)

    # Now reset singletons - they will pick up the test database path
    reset_orm_manager()
    reset_service_factory()

    yield

    # Cleanup after test
    reset_orm_manager()
    reset_service_factory()

    # Restore old env vars
    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)

    # Clean up temp directory
    with contextlib.suppress(Exception):
        shutil.rmtree(tmpdir)


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """Get the test database path."""
    # Return the path set by reset_singletons fixture
    yield os.environ["CASEWORK_DB_PATH"]


@pytest.fixture
def orm_manager(temp_db_path: str) -> Generator[ORMManager, None, None]:
    """Create an ORM manager with a temporary database."""
    manager = ORMManager(f"sqlite:///{temp_db_path}")
    yield manager
    manager.close()


@pytest.fixture
def task_repo(orm_manager: ORMManager):
    """Create a task repository."""
    from casework_tasks.database.repositories import TaskRepository

    return TaskRepository(orm_manager)


@pytest.fixture
def task_service(task_repo):
    """Create a task service with a fresh case-number sequence."""
    from casework_tasks.services import CaseNumberSequence, TaskService

    return TaskService(task_repo=task_repo, case_numbers=CaseNumberSequence())


@pytest.fixture
def settings() -> Settings:
    """Settings resolved from the test environment."""
    return Settings.from_env()


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """HTTP client for the app wired to the temporary database."""
    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def future_due():
    """ISO due date a few days ahead."""
    return (utc_now() + timedelta(days=5)).isoformat()
