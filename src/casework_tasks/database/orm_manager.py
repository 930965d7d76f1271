"""
ORM Manager - Centralized database connection and session management.

Provides singleton access to database connections with proper session lifecycle.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from casework_tasks.config import get_database_url
from casework_tasks.database.models.base import Base

logger = logging.getLogger(__name__)

# Module-level singleton
_global_orm_manager: Optional["ORMManager"] = None
_global_lock = threading.Lock()


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def get_orm_manager(database_url: Optional[str] = None) -> "ORMManager":
    """
    Get the singleton ORM manager instance.

    Args:
        database_url: Optional SQLAlchemy URL. Uses the configured default if not provided.

    Returns:
        ORMManager singleton instance.
    """
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is None:
            _global_orm_manager = ORMManager(database_url)
        return _global_orm_manager


def reset_orm_manager() -> None:
    """Reset the global ORM manager (for testing)."""
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is not None:
            _global_orm_manager.close()
            _global_orm_manager = None


class ORMManager:
    """
    Centralized ORM manager for database connections.

    Manages SQLAlchemy engine and session lifecycle. SQLite databases get
    WAL journaling and a shared static pool when held in memory.
    """

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize the ORM manager.

        Args:
            database_url: SQLAlchemy URL. Uses CASEWORK_DATABASE_URL / CASEWORK_DB_PATH if not provided.
        """
        self.database_url = database_url or get_database_url()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

        # Initialize engine and create tables
        self._initialize()

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    def _initialize(self) -> None:
        """Initialize the database engine and create tables."""
        engine_kwargs: Dict[str, Any] = {"echo": False, "pool_pre_ping": True}
        url = make_url(self.database_url)

        if self.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool

        self._engine = create_engine(self.database_url, **engine_kwargs)

        if self.is_sqlite:

            @event.listens_for(self._engine, "connect")
            def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
                # SQLite's built-in lower() only folds ASCII
                dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

        # Create session factory
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=True,
            expire_on_commit=False,
        )

        # Create all tables
        Base.metadata.create_all(self._engine)
        logger.debug("Database schema ready at %s", url.render_as_string(hide_password=True))

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("ORM Manager not initialized")
        return self._engine

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic commit/rollback.

        Usage:
            with orm_manager.get_session() as session:
                session.add(Task(case_number="TASK000001", ...))
                # Auto-commit on successful exit
                # Auto-rollback on exception
        """
        if self._session_factory is None:
            raise RuntimeError("ORM Manager not initialized")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def perform_health_check(self) -> Dict[str, Any]:
        """
        Perform a database health check.

        Returns:
            Dictionary with health check results.
        """
        try:
            with self.get_session() as session:
                result = session.execute(text("SELECT 1")).scalar()
                if result != 1:
                    return {"healthy": False, "error": "Basic query failed"}

            table_names = inspect(self.engine).get_table_names()
            return {
                "healthy": True,
                "backend": make_url(self.database_url).get_backend_name(),
                "tables": table_names,
                "table_count": len(table_names),
            }
        except Exception as e:
            logger.error("Database health check failed: %s", type(e).__name__)
            return {"healthy": False, "error": type(e).__name__}

    def close(self) -> None:
        """Close the database engine and release resources."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def __del__(self) -> None:
        """Cleanup on deletion."""
        self.close()
