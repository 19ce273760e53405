"""
Standard Exception Hierarchy for todostore

This module provides the exception hierarchy shared by the storage engines,
the engine factory and the todo service. Every exception inherits from
TodoStoreError and carries a human-readable message, a context dictionary and
(optionally) the original exception that caused it.

Engine-level failures inherit from StorageError. The service layer never lets
those escape directly: it wraps them into ServiceError, keeping the engine
error as the cause so callers can still branch on it.
"""
from typing import Any


# ============================================================================
# Base Exception Class
# ============================================================================

class TodoStoreError(Exception):
    """Base exception for all todostore errors.

    Attributes:
        message: Human-readable error message
        context: Dictionary of additional context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        """Initialize error.

        Args:
            message: Human-readable error message
            context: Optional dictionary of additional context
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error)
            }
        return result


# ============================================================================
# Storage Engine Exceptions
# ============================================================================

class StorageError(TodoStoreError):
    """Base class for failures raised by a storage engine.

    Attributes:
        backend: Backend tag of the engine that failed (e.g. "mysql", "mongodb")
    """

    def __init__(
        self,
        message: str,
        *,
        backend: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, context=context, original_error=original_error)
        self.backend = backend
        if backend is not None:
            self.context.setdefault("backend", backend)


class StorageConnectionError(StorageError):
    """Raised when the backend is unreachable or a connection-level failure occurs."""


class ValidationError(StorageError):
    """Raised when an identifier or record does not fit the backend's rules.

    Attributes:
        field: Optional field name that failed validation
        value: Optional value that failed validation
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        backend: str | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize validation error.

        Args:
            message: Error message describing the validation failure
            field: Optional field name that failed validation
            value: Optional value that failed validation
            backend: Optional backend tag
            context: Optional additional context
        """
        super().__init__(message, backend=backend, context=context)
        self.field = field
        self.value = value
        if field is not None:
            self.context.setdefault("field", field)
        if value is not None:
            self.context.setdefault("value", str(value))


class NotFoundError(StorageError):
    """Raised when an update targets an identifier that does not exist.

    Attributes:
        resource_type: Type of resource (always "Todo" today)
        resource_id: ID of the resource that was not found
    """

    def __init__(
        self,
        resource_id: str,
        *,
        resource_type: str = "Todo",
        message: str | None = None,
        backend: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"{resource_type} with ID '{resource_id}' not found"

        super().__init__(message, backend=backend, context=context)
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        self.context.setdefault("resource_type", resource_type)
        self.context.setdefault("resource_id", str(resource_id))


class DatabaseError(StorageError):
    """Raised when a statement fails for a reason other than connectivity.

    Attributes:
        operation: Optional database operation that failed (e.g., "INSERT", "SELECT")
    """

    def __init__(
        self,
        message: str,
        *,
        original_error: Exception | None = None,
        operation: str | None = None,
        backend: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, backend=backend, context=context, original_error=original_error)
        self.operation = operation
        if operation is not None:
            self.context.setdefault("operation", operation)


# ============================================================================
# Startup Exceptions
# ============================================================================

class ConfigurationError(TodoStoreError):
    """Raised when the engine cannot be built from the supplied configuration.

    Unknown backend tags, unusable table names and missing database drivers
    all end up here. These are fatal at startup and are not wrapped by the
    service layer.
    """


# ============================================================================
# Service Exceptions
# ============================================================================

class ServiceError(TodoStoreError):
    """Uniform error raised by TodoService for any engine-level failure.

    The engine error is kept both as ``original_error`` and as ``__cause__``.

    Attributes:
        operation: Service operation that failed (e.g. "add", "update")
        todo_id: Identifier the operation was about, if any
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        todo_id: str | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, context=context, original_error=original_error)
        self.operation = operation
        self.todo_id = todo_id
        self.context.setdefault("operation", operation)
        if todo_id is not None:
            self.context.setdefault("todo_id", todo_id)

    @property
    def cause(self) -> Exception | None:
        """The engine-level error this service error wraps."""
        return self.original_error

    @property
    def is_not_found(self) -> bool:
        return isinstance(self.original_error, NotFoundError)

    @property
    def is_validation_error(self) -> bool:
        return isinstance(self.original_error, ValidationError)

    @property
    def is_connection_error(self) -> bool:
        return isinstance(self.original_error, StorageConnectionError)


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    "TodoStoreError",
    "StorageError",
    "StorageConnectionError",
    "ValidationError",
    "NotFoundError",
    "DatabaseError",
    "ConfigurationError",
    "ServiceError",
]
