"""
Standard exceptions for the storage engines and the service layer.
"""
from todostore.exceptions.errors import (
    TodoStoreError,
    StorageError,
    StorageConnectionError,
    ValidationError,
    NotFoundError,
    DatabaseError,
    ConfigurationError,
    ServiceError,
)

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
