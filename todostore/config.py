"""
Unified configuration for backend selection and connection settings.

This module provides a single source of truth for the settings every storage
backend needs, used consistently by:
- The engine factory
- The click CLI and the interactive shell
- The ``python -m todostore`` commands

Values come from environment variables or a ``.env`` file. Every variable has
a documented default so the package works out of the box against a local
SQLite file.

This module uses Pydantic Settings for type-safe configuration management
with support for .env files and environment variable overrides.
"""
import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default SQLite path, relative to the working directory
DEFAULT_SQLITE_PATH = "data/todos.db"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings for todostore.

    All configuration values can be set via environment variables or .env file.
    Field names map to upper-case variable names (``mysql_url`` ->
    ``MYSQL_URL``). The database URLs also accept the JDBC-era names
    ``MYSQL_JDBC_URL`` and ``POSTGRES_JDBC_URL``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # Backend Selection
    # ============================================================================
    storage_backend: str = "sqlite"
    todo_table: str = "todos"

    # ============================================================================
    # MySQL
    # ============================================================================
    mysql_url: str = Field(
        default="mysql://localhost:3306/todos_db",
        validation_alias=AliasChoices("mysql_url", "mysql_jdbc_url"),
    )
    mysql_user: str = "root"
    mysql_pass: str = "0000"

    # ============================================================================
    # PostgreSQL
    # ============================================================================
    postgres_url: str = Field(
        default="postgresql://localhost:5432/todos_db",
        validation_alias=AliasChoices("postgres_url", "postgres_jdbc_url"),
    )
    postgres_user: str = "postgres"
    postgres_pass: str = "0000"

    # ============================================================================
    # MongoDB
    # ============================================================================
    mongo_conn: str = "mongodb://localhost:27017"
    mongo_db: str = "todos_db"
    mongo_collection: str = "todos"

    # ============================================================================
    # SQLite
    # ============================================================================
    sqlite_path: str = DEFAULT_SQLITE_PATH

    # ============================================================================
    # Logging
    # ============================================================================
    log_level: str = "INFO"

    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: Optional[str]) -> str:
        """Backend tags are matched case-insensitively."""
        if not v:
            return "sqlite"
        return str(v).strip().lower()

    @field_validator("sqlite_path", mode="before")
    @classmethod
    def resolve_sqlite_path(cls, v: Optional[str]) -> str:
        """Resolve the SQLite path to an absolute path (``:memory:`` is kept as is)."""
        if not v:
            v = DEFAULT_SQLITE_PATH
        if v == ":memory:":
            return v
        return os.path.abspath(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        if not v:
            return "INFO"
        return str(v).strip().upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install the process-wide logging handler.

    Args:
        level: Log level name. If None, uses the LOG_LEVEL setting.
    """
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
