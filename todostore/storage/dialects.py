"""
SQL dialect layer for the relational storage engine.

A dialect knows how to reach one SQL database family: which driver to import,
how to open a connection, which placeholder style the driver expects, how the
auto-increment key column is spelled and how to read back a generated key.
The RelationalEngine itself only speaks in terms of these methods.
"""
import os
import sqlite3
import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional, Tuple
from urllib.parse import urlsplit

from todostore.exceptions import ConfigurationError


class DatabaseType(Enum):
    """Database type enumeration."""
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


def _strip_jdbc(url: str) -> str:
    """Accept JDBC-style URLs (``jdbc:mysql://...``) by dropping the prefix."""
    if url.startswith("jdbc:"):
        return url[len("jdbc:"):]
    return url


class BaseDialect(ABC):
    """Abstract base class for SQL dialects."""

    db_type: DatabaseType
    placeholder: str = "?"

    def __init__(self, url: str, user: Optional[str] = None, password: Optional[str] = None):
        """
        Initialize dialect.

        Args:
            url: Database location (file path for SQLite, URL for server databases)
            user: Optional username
            password: Optional password
        """
        self.url = url
        self.user = user
        self.password = password

    @property
    def name(self) -> str:
        return self.db_type.value

    @abstractmethod
    def connect(self):
        """Open a new database connection."""
        pass

    def close(self, conn) -> None:
        """Close a database connection."""
        conn.close()

    @property
    @abstractmethod
    def error_types(self) -> Tuple[type, ...]:
        """Base exception classes raised by the driver."""
        pass

    def is_connection_error(self, exc: Exception) -> bool:
        """Whether a driver error raised mid-operation means the connection is unusable."""
        return False

    @abstractmethod
    def get_pk_type(self) -> str:
        """Get primary key type definition."""
        pass

    def normalize_query(self, query: str) -> str:
        """Rewrite ``?`` placeholders into the driver's paramstyle."""
        if self.placeholder == "?":
            return query
        return query.replace("?", self.placeholder)

    def execute(self, cursor, query: str, params: Optional[Tuple] = None):
        """Execute a query with parameters."""
        normalized = self.normalize_query(query)
        if params:
            return cursor.execute(normalized, params)
        return cursor.execute(normalized)

    def create_table_sql(self, table: str) -> str:
        """DDL that idempotently creates the todo table."""
        return (
            f"CREATE TABLE IF NOT EXISTS {table} ("
            f"id {self.get_pk_type()}, "
            "title TEXT, "
            "description TEXT, "
            "completed BOOLEAN"
            ")"
        )

    def insert_returning_id(self, cursor, query: str, params: Tuple) -> int:
        """Run an INSERT and return the generated primary key."""
        self.execute(cursor, query, params)
        return cursor.lastrowid

    def dispose(self) -> None:
        """Release anything the dialect holds between operations."""

    def describe(self) -> str:
        """Location string safe for logs (never includes the password)."""
        return self.url


class SQLiteDialect(BaseDialect):
    """SQLite dialect backed by the standard library driver."""

    db_type = DatabaseType.SQLITE

    def __init__(self, url: str, user: Optional[str] = None, password: Optional[str] = None):
        super().__init__(url, user, password)
        self._anchor = None
        self._memory_uri = None
        if url == ":memory:":
            # Every plain ":memory:" connection is a separate empty database,
            # so connections share one named in-memory database instead
            self._memory_uri = f"file:todostore-{uuid.uuid4().hex}?mode=memory&cache=shared"

    def connect(self):
        if self._memory_uri is not None:
            # The shared database lives only while a connection to it is open
            if self._anchor is None:
                self._anchor = sqlite3.connect(self._memory_uri, uri=True)
            return sqlite3.connect(self._memory_uri, uri=True)
        db_dir = os.path.dirname(os.path.abspath(self.url))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(self.url)

    def dispose(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None

    @property
    def error_types(self) -> Tuple[type, ...]:
        return (sqlite3.Error,)

    def get_pk_type(self) -> str:
        return "INTEGER PRIMARY KEY AUTOINCREMENT"


class PostgreSQLDialect(BaseDialect):
    """PostgreSQL dialect backed by psycopg2."""

    db_type = DatabaseType.POSTGRESQL
    placeholder = "%s"

    def __init__(self, url: str, user: Optional[str] = None, password: Optional[str] = None):
        super().__init__(_strip_jdbc(url), user, password)

    def _driver(self):
        try:
            import psycopg2
        except ImportError as e:
            raise ConfigurationError(
                "psycopg2-binary is required for PostgreSQL support. Install it with: pip install psycopg2-binary",
                original_error=e,
            ) from e
        return psycopg2

    def connect(self):
        psycopg2 = self._driver()
        kwargs: dict[str, Any] = {}
        if self.user:
            kwargs["user"] = self.user
        if self.password:
            kwargs["password"] = self.password
        return psycopg2.connect(self.url, **kwargs)

    @property
    def error_types(self) -> Tuple[type, ...]:
        return (self._driver().Error,)

    def is_connection_error(self, exc: Exception) -> bool:
        psycopg2 = self._driver()
        return isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError))

    def get_pk_type(self) -> str:
        return "SERIAL PRIMARY KEY"

    def insert_returning_id(self, cursor, query: str, params: Tuple) -> int:
        # PostgreSQL has no lastrowid for SERIAL keys; ask for the key explicitly
        self.execute(cursor, f"{query} RETURNING id", params)
        row = cursor.fetchone()
        return row[0]

    def describe(self) -> str:
        parts = urlsplit(self.url)
        if not parts.scheme:
            # keyword/value DSN ("host=... dbname=...") may carry a password
            return "postgresql"
        port = f":{parts.port}" if parts.port else ""
        return f"{parts.scheme}://{parts.hostname or 'localhost'}{port}{parts.path}"


class MySQLDialect(BaseDialect):
    """MySQL dialect backed by PyMySQL."""

    db_type = DatabaseType.MYSQL
    placeholder = "%s"
    default_port = 3306

    def __init__(self, url: str, user: Optional[str] = None, password: Optional[str] = None):
        super().__init__(_strip_jdbc(url), user, password)
        parts = urlsplit(self.url)
        self.host = parts.hostname or "localhost"
        self.port = parts.port or self.default_port
        self.database = parts.path.lstrip("/") or None

    def _driver(self):
        try:
            import pymysql
        except ImportError as e:
            raise ConfigurationError(
                "PyMySQL is required for MySQL support. Install it with: pip install PyMySQL",
                original_error=e,
            ) from e
        return pymysql

    def connect(self):
        pymysql = self._driver()
        from pymysql.constants import CLIENT

        # FOUND_ROWS: UPDATE reports matched rows, not changed rows, so a
        # no-op update of an existing todo is not mistaken for a missing one
        return pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password or "",
            database=self.database,
            charset="utf8mb4",
            client_flag=CLIENT.FOUND_ROWS,
        )

    @property
    def error_types(self) -> Tuple[type, ...]:
        return (self._driver().MySQLError,)

    def is_connection_error(self, exc: Exception) -> bool:
        pymysql = self._driver()
        return isinstance(exc, (pymysql.err.OperationalError, pymysql.err.InterfaceError))

    def get_pk_type(self) -> str:
        return "INT AUTO_INCREMENT PRIMARY KEY"

    def describe(self) -> str:
        return f"mysql://{self.host}:{self.port}/{self.database or ''}"
