"""
Todo service - business logic for todo operations.
This layer contains no front-end dependencies.

Every engine-level failure leaves this layer as a ServiceError that names the
operation and keeps the engine error as its cause. Nothing is retried and
nothing is downgraded.
"""
import logging
from typing import List, NoReturn, Optional

from todostore.exceptions import NotFoundError, ServiceError, StorageError
from todostore.models import Todo
from todostore.services.audit import AuditHook, LoggingAuditHook
from todostore.storage import StorageEngine

logger = logging.getLogger(__name__)


class TodoService:
    """Service for todo business logic."""

    def __init__(self, storage: StorageEngine, audit: Optional[AuditHook] = None):
        """
        Initialize todo service.

        Args:
            storage: Storage engine all operations go through
            audit: Hook notified of successful operations (defaults to logging)
        """
        self.storage = storage
        self.audit = audit if audit is not None else LoggingAuditHook()

    def _fail(self, operation: str, message: str, error: StorageError, todo_id: Optional[str] = None) -> NoReturn:
        logger.error(message, exc_info=error)
        raise ServiceError(
            f"{message}: {error.message}",
            operation=operation,
            todo_id=todo_id,
            original_error=error,
        ) from error

    def add_todo(self, todo: Todo) -> Todo:
        """
        Persist a new todo.

        Args:
            todo: Unsaved todo (no ID)

        Returns:
            The stored todo carrying its backend-assigned ID

        Raises:
            ServiceError: If the engine rejects or fails the insert
        """
        try:
            created = self.storage.create(todo)
        except StorageError as e:
            self._fail("add", "Failed to add todo", e, todo.id)
        self.audit.record("todo.created", id=created.id, backend=self.storage.kind)
        return created

    def get_todo(self, todo_id: str) -> Optional[Todo]:
        """Get a todo by ID, or None if it does not exist."""
        try:
            todo = self.storage.retrieve_by_id(todo_id)
        except StorageError as e:
            self._fail("get", f"Failed to retrieve todo {todo_id}", e, todo_id)
        self.audit.record("todo.retrieved", id=todo_id, found=todo is not None)
        return todo

    def list_todos(self) -> List[Todo]:
        """List every todo in the backend."""
        try:
            todos = self.storage.retrieve_all()
        except StorageError as e:
            self._fail("list", "Failed to fetch all todos", e)
        self.audit.record("todo.listed", count=len(todos))
        return todos

    def update_todo(self, todo: Todo) -> Todo:
        """
        Replace the stored fields of an existing todo.

        Returns:
            The todo as passed in

        Raises:
            ServiceError: If the ID is malformed or missing, or no todo matches
        """
        try:
            self.storage.update(todo)
        except StorageError as e:
            self._fail("update", f"Failed to update todo {todo.id}", e, todo.id)
        self.audit.record("todo.updated", id=todo.id)
        return todo

    def edit_todo(
        self,
        todo_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Todo:
        """
        Change only the given fields of a stored todo.

        Fields left as None keep their stored value.

        Raises:
            ServiceError: If the todo does not exist (cause: NotFoundError)
                or the engine fails
        """
        current = self.get_todo(todo_id)
        if current is None:
            self._fail("update", f"Failed to update todo {todo_id}", NotFoundError(todo_id, backend=self.storage.kind), todo_id)

        changes = {}
        if title is not None:
            changes["title"] = title
        if description is not None:
            changes["description"] = description
        if completed is not None:
            changes["completed"] = completed
        return self.update_todo(current.model_copy(update=changes))

    def delete_todo(self, todo_id: str) -> None:
        """Delete a todo. Deleting a missing todo is not an error."""
        try:
            self.storage.delete(todo_id)
        except StorageError as e:
            self._fail("delete", f"Failed to delete todo {todo_id}", e, todo_id)
        self.audit.record("todo.deleted", id=todo_id)
