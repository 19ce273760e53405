"""
Relational storage engine.

One engine class serves every SQL database; the differences between MySQL,
PostgreSQL and SQLite are delegated to a dialect object. Every operation opens
its own connection and closes it again on the way out, whatever happened in
between.
"""
import logging
import re
from contextlib import contextmanager, suppress
from typing import Iterator, List, Optional, Tuple

from todostore.exceptions import (
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    StorageConnectionError,
    StorageError,
    ValidationError,
)
from todostore.models import Todo
from todostore.storage.dialects import BaseDialect
from todostore.storage.interface import StorageEngine

logger = logging.getLogger(__name__)

_TABLE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMERIC_ID = re.compile(r"[0-9]+")

# Largest key any of the supported dialects can hold (BIGINT)
MAX_ID = 2 ** 63 - 1

_COLUMNS = "id, title, description, completed"


class RelationalEngine(StorageEngine):
    """SQL-backed todo storage with integer keys.

    Identifiers are the table's auto-increment key rendered as a decimal
    string. Anything that is not a plain non-negative integer is rejected with
    ValidationError before a connection is opened.

    Example:
        engine = RelationalEngine(SQLiteDialect("/tmp/todos.db"))
        saved = engine.create(Todo(title="Buy milk", description="2%"))
        engine.retrieve_by_id(saved.id)
    """

    def __init__(self, dialect: BaseDialect, table: str = "todos"):
        """
        Initialize the engine and make sure the todo table exists.

        Args:
            dialect: Dialect for the target database
            table: Table name (plain SQL identifier)

        Raises:
            ConfigurationError: If the table name is not a plain identifier
                or the dialect's driver is not installed
            StorageConnectionError: If the database cannot be reached
            DatabaseError: If the table cannot be created
        """
        if not table or not _TABLE_NAME.fullmatch(table):
            raise ConfigurationError(
                f"Invalid table name '{table}': expected a plain SQL identifier",
                context={"table": table},
            )
        self.dialect = dialect
        self.table = table
        self.kind = dialect.name
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        try:
            with self._connection("CREATE TABLE") as conn:
                cursor = conn.cursor()
                self.dialect.execute(cursor, self.dialect.create_table_sql(self.table))
        except StorageError:
            self.dialect.dispose()
            logger.error(f"Failed to initialize table '{self.table}' on {self.dialect.describe()}", exc_info=True)
            raise
        logger.info(f"Table '{self.table}' verified/created on {self.dialect.describe()}")

    @contextmanager
    def _connection(self, operation: str) -> Iterator:
        """
        Open a connection for one operation.

        Commits when the block finishes, rolls back when it raises and always
        closes the connection. Driver errors are translated into storage
        errors; errors raised by the engine itself pass through unchanged.
        """
        errors = self.dialect.error_types
        try:
            conn = self.dialect.connect()
        except (*errors, OSError) as e:
            raise StorageConnectionError(
                f"Could not connect to {self.kind} at {self.dialect.describe()}: {e}",
                backend=self.kind,
                original_error=e,
            ) from e

        try:
            yield conn
            conn.commit()
        except errors as e:
            with suppress(*errors):
                conn.rollback()
            raise self._translate(e, operation) from e
        except Exception:
            with suppress(*errors):
                conn.rollback()
            raise
        finally:
            self.dialect.close(conn)

    def _translate(self, exc: Exception, operation: str) -> StorageError:
        if self.dialect.is_connection_error(exc):
            return StorageConnectionError(
                f"Lost connection to {self.kind} during {operation}: {exc}",
                backend=self.kind,
                original_error=exc,
            )
        return DatabaseError(
            f"{operation} on {self.kind} table '{self.table}' failed: {exc}",
            operation=operation,
            backend=self.kind,
            original_error=exc,
        )

    def _parse_id(self, todo_id: Optional[str]) -> int:
        if not isinstance(todo_id, str) or not _NUMERIC_ID.fullmatch(todo_id):
            raise ValidationError(
                f"Invalid todo ID '{todo_id}': {self.kind} IDs are decimal integers",
                field="id",
                value=todo_id,
                backend=self.kind,
            )
        key = int(todo_id)
        if key > MAX_ID:
            raise ValidationError(
                f"Invalid todo ID '{todo_id}': out of range",
                field="id",
                value=todo_id,
                backend=self.kind,
            )
        return key

    @staticmethod
    def _row_to_todo(row: Tuple) -> Todo:
        return Todo(
            id=str(row[0]),
            title=row[1] or "",
            description=row[2] or "",
            completed=bool(row[3]),
        )

    def create(self, todo: Todo) -> Todo:
        if todo.is_persisted:
            raise ValidationError(
                f"Todo already has ID '{todo.id}'; create expects an unsaved todo",
                field="id",
                value=todo.id,
                backend=self.kind,
            )
        query = f"INSERT INTO {self.table} (title, description, completed) VALUES (?, ?, ?)"
        with self._connection("INSERT") as conn:
            cursor = conn.cursor()
            new_id = self.dialect.insert_returning_id(
                cursor, query, (todo.title, todo.description, todo.completed)
            )
        if new_id is None:
            raise DatabaseError(
                f"INSERT on {self.kind} returned no generated key",
                operation="INSERT",
                backend=self.kind,
            )
        logger.debug(f"Saved todo {new_id} to {self.kind}")
        return todo.with_id(str(new_id))

    def retrieve_by_id(self, todo_id: str) -> Optional[Todo]:
        key = self._parse_id(todo_id)
        with self._connection("SELECT") as conn:
            cursor = conn.cursor()
            self.dialect.execute(cursor, f"SELECT {_COLUMNS} FROM {self.table} WHERE id = ?", (key,))
            row = cursor.fetchone()
        return self._row_to_todo(row) if row else None

    def retrieve_all(self) -> List[Todo]:
        with self._connection("SELECT") as conn:
            cursor = conn.cursor()
            self.dialect.execute(cursor, f"SELECT {_COLUMNS} FROM {self.table} ORDER BY id")
            rows = cursor.fetchall()
        return [self._row_to_todo(row) for row in rows]

    def update(self, todo: Todo) -> None:
        if not todo.is_persisted:
            raise ValidationError(
                "Cannot update a todo without an ID",
                field="id",
                backend=self.kind,
            )
        key = self._parse_id(todo.id)
        query = f"UPDATE {self.table} SET title = ?, description = ?, completed = ? WHERE id = ?"
        with self._connection("UPDATE") as conn:
            cursor = conn.cursor()
            self.dialect.execute(cursor, query, (todo.title, todo.description, todo.completed, key))
            if cursor.rowcount == 0:
                raise NotFoundError(todo.id, backend=self.kind)
        logger.debug(f"Updated todo {todo.id} on {self.kind}")

    def delete(self, todo_id: str) -> None:
        key = self._parse_id(todo_id)
        with self._connection("DELETE") as conn:
            cursor = conn.cursor()
            self.dialect.execute(cursor, f"DELETE FROM {self.table} WHERE id = ?", (key,))
        logger.debug(f"Deleted todo {todo_id} from {self.kind}")

    def close(self) -> None:
        self.dialect.dispose()
