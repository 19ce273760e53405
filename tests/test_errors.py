"""
Tests for the exception hierarchy.
"""
import pytest

from todostore.exceptions import (
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    ServiceError,
    StorageConnectionError,
    StorageError,
    TodoStoreError,
    ValidationError,
)


@pytest.mark.parametrize("cls", [StorageConnectionError, DatabaseError])
def test_storage_errors_share_base(cls):
    error = cls("failed", backend="mysql")

    assert isinstance(error, StorageError)
    assert isinstance(error, TodoStoreError)
    assert error.context["backend"] == "mysql"


def test_connection_error_does_not_shadow_builtin():
    assert not issubclass(StorageConnectionError, ConnectionError)


def test_validation_error_context():
    error = ValidationError("Invalid todo ID", field="id", value=123, backend="mongodb")

    assert error.field == "id"
    assert error.value == 123
    assert error.context == {"backend": "mongodb", "field": "id", "value": "123"}


def test_not_found_default_message():
    error = NotFoundError("42", backend="postgresql")

    assert error.message == "Todo with ID '42' not found"
    assert error.resource_id == "42"
    assert not isinstance(error, ValidationError)


def test_to_dict_includes_original_error():
    original = OSError("socket closed")
    error = DatabaseError("SELECT failed", operation="SELECT", original_error=original)

    assert error.to_dict() == {
        "error_type": "DatabaseError",
        "message": "SELECT failed",
        "context": {"operation": "SELECT"},
        "original_error": {"type": "OSError", "message": "socket closed"},
    }


def test_configuration_error_is_not_a_storage_error():
    assert not issubclass(ConfigurationError, StorageError)


def test_service_error_predicates():
    not_found = ServiceError("x", operation="update", original_error=NotFoundError("1"))
    invalid = ServiceError("x", operation="get", original_error=ValidationError("bad"))
    down = ServiceError("x", operation="list", original_error=StorageConnectionError("down"))

    assert (not_found.is_not_found, not_found.is_validation_error, not_found.is_connection_error) == (True, False, False)
    assert (invalid.is_not_found, invalid.is_validation_error) == (False, True)
    assert down.is_connection_error
    assert down.context == {"operation": "list"}
