"""Runtime configuration from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from sqlalchemy import Engine, create_engine

DEFAULT_DATABASE_URL = "sqlite:///:memory:"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """findforge settings.

    Supports sqlite:/// and postgresql:// URL schemes.
    """

    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        Resolution order for the database URL:
        1. FINDFORGE_DATABASE_URL env var
        2. DATABASE_URL env var (standard)
        3. Default: in-memory SQLite

        FINDFORGE_LOG_LEVEL sets the log level (default WARNING).
        """
        url = (
            os.environ.get("FINDFORGE_DATABASE_URL")
            or os.environ.get("DATABASE_URL")
            or DEFAULT_DATABASE_URL
        )
        level = os.environ.get("FINDFORGE_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        return cls(database_url=url, log_level=level.upper())

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_postgresql(self) -> bool:
        return self.database_url.startswith("postgresql")

    @property
    def sqlalchemy_url(self) -> str:
        """URL suitable for SQLAlchemy engine creation.

        Plain postgresql:// URLs are pointed at the psycopg (v3) driver.
        """
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+psycopg://", 1)
        return self.database_url


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create a SQLAlchemy engine for the configured database."""
    return create_engine(settings.sqlalchemy_url)


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for command-line use."""
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
