"""
Storage interface - defines the contract for all storage backends.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from todostore.models import Todo


class StorageEngine(ABC):
    """Abstract interface for todo persistence.

    Identifiers are opaque strings at this boundary. Each engine owns the rule
    for what a well-formed identifier looks like and raises ValidationError
    before touching the store when an identifier breaks it.
    """

    kind: str = ""

    @abstractmethod
    def create(self, todo: Todo) -> Todo:
        """Persist an unsaved todo and return a copy carrying its new ID."""
        pass

    @abstractmethod
    def retrieve_by_id(self, todo_id: str) -> Optional[Todo]:
        """Get a todo by ID, or None if no record matches."""
        pass

    @abstractmethod
    def retrieve_all(self) -> List[Todo]:
        """List every stored todo."""
        pass

    @abstractmethod
    def update(self, todo: Todo) -> None:
        """Replace title, description and completed of an existing todo."""
        pass

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        """Delete a todo. Deleting a missing ID is not an error."""
        pass

    def close(self) -> None:
        """Release long-lived resources held by the engine."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
