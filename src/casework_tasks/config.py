"""
Runtime configuration.

Settings are read from CASEWORK_* environment variables, falling back to
defaults suitable for a local SQLite deployment under ~/.casework/.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_default_db_path() -> str:
    """Get the default database path.

    Checks CASEWORK_DB_PATH environment variable first, then falls back
    to ~/.casework/tasks.db, creating directory if needed.
    """
    env_db_path = os.environ.get("CASEWORK_DB_PATH")
    if env_db_path:
        db_path = Path(env_db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return str(db_path)

    casework_dir = Path.home() / ".casework"
    casework_dir.mkdir(parents=True, exist_ok=True)
    return str(casework_dir / "tasks.db")


def get_database_url() -> str:
    """Resolve the SQLAlchemy URL (CASEWORK_DATABASE_URL wins over the SQLite path)."""
    url = os.environ.get("CASEWORK_DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{get_default_db_path()}"


class Settings(BaseSettings):
    """Typed service settings sourced from CASEWORK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CASEWORK_",
        env_ignore_empty=True,
        extra="ignore",
    )

    database_url: str = Field(default_factory=get_database_url)
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: str = DEFAULT_LOG_LEVEL
    debug: bool = False

    # Comma-separated list, "*" allows any origin
    cors_origins: str = "*"

    case_number_start: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def _debug_forces_debug_logging(self) -> "Settings":
        if self.debug:
            self.log_level = "DEBUG"
        self.log_level = self.log_level.upper()
        return self

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        return cls()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process."""
    resolved = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
    )
