"""
Todo record model shared by every storage engine.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class Todo(BaseModel):
    """A single todo item.

    ``id`` stays ``None`` until a storage engine persists the record; the
    engine then hands back a copy carrying the backend-assigned identifier.
    Identifiers are always strings at this level, whatever the backend uses
    internally (integer keys, ObjectIds).
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[str] = None
    title: str
    description: str = ""
    completed: bool = False

    @property
    def is_persisted(self) -> bool:
        """True once a backend has assigned an identifier."""
        return bool(self.id)

    def with_id(self, todo_id: str) -> "Todo":
        """Return a copy of this record carrying ``todo_id``."""
        return self.model_copy(update={"id": todo_id})

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        text = f"[{mark}] #{self.id}: {self.title}"
        if self.description:
            text += f" - {self.description}"
        return text
