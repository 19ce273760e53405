"""
Engine factory - builds the configured storage engine.

Supported backend tags (case-insensitive):
    - "mysql": MySQL through PyMySQL
    - "postgres" / "postgresql": PostgreSQL through psycopg2
    - "mongodb" / "mongo": MongoDB through pymongo
    - "sqlite": local SQLite file

Example:
    from todostore.config import get_settings
    from todostore.storage import build_engine

    engine = build_engine("postgres", get_settings())
"""
import logging
from typing import Callable, Dict, Optional

from todostore.config import Settings, get_settings
from todostore.exceptions import ConfigurationError
from todostore.storage.dialects import MySQLDialect, PostgreSQLDialect, SQLiteDialect
from todostore.storage.document import DocumentEngine
from todostore.storage.interface import StorageEngine
from todostore.storage.relational import RelationalEngine

logger = logging.getLogger(__name__)


def _build_mysql(settings: Settings) -> StorageEngine:
    dialect = MySQLDialect(settings.mysql_url, settings.mysql_user, settings.mysql_pass)
    return RelationalEngine(dialect, settings.todo_table)


def _build_postgres(settings: Settings) -> StorageEngine:
    dialect = PostgreSQLDialect(settings.postgres_url, settings.postgres_user, settings.postgres_pass)
    return RelationalEngine(dialect, settings.todo_table)


def _build_sqlite(settings: Settings) -> StorageEngine:
    return RelationalEngine(SQLiteDialect(settings.sqlite_path), settings.todo_table)


def _build_mongo(settings: Settings) -> StorageEngine:
    return DocumentEngine(settings.mongo_conn, settings.mongo_db, settings.mongo_collection)


class EngineFactory:
    """Maps backend tags to engine builders."""

    _BUILDERS: Dict[str, Callable[[Settings], StorageEngine]] = {
        "mysql": _build_mysql,
        "postgres": _build_postgres,
        "postgresql": _build_postgres,
        "mongodb": _build_mongo,
        "mongo": _build_mongo,
        "sqlite": _build_sqlite,
    }

    @classmethod
    def supported_tags(cls) -> list:
        return sorted(cls._BUILDERS)

    @classmethod
    def build(cls, type_tag: str, settings: Optional[Settings] = None) -> StorageEngine:
        """
        Build a storage engine.

        Args:
            type_tag: Backend tag (see module docstring)
            settings: Connection settings. If None, uses get_settings().

        Returns:
            A ready-to-use StorageEngine

        Raises:
            ConfigurationError: If the tag is not recognized
        """
        tag = (type_tag or "").strip().lower()
        builder = cls._BUILDERS.get(tag)
        if builder is None:
            raise ConfigurationError(
                f"Unknown storage type: {type_tag!r}. Expected one of: {', '.join(cls.supported_tags())}",
                context={"type_tag": type_tag},
            )
        if settings is None:
            settings = get_settings()
        logger.info(f"Creating storage of type: {tag}")
        return builder(settings)


def build_engine(type_tag: str, settings: Optional[Settings] = None) -> StorageEngine:
    """Build a storage engine for ``type_tag``; see EngineFactory.build."""
    return EngineFactory.build(type_tag, settings)
