"""
Audit hooks observe successful todo operations.

TodoService reports every successful operation to the hook it was given. The
entry point decides which hook to use and owns its lifecycle.
"""
import logging
from typing import Any, Protocol


class AuditHook(Protocol):
    """Receives one call per successful service operation."""

    def record(self, event: str, **details: Any) -> None:
        ...


class LoggingAuditHook:
    """Writes audit events to a logger (``todostore.audit`` by default)."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("todostore.audit")
        self.level = level

    def record(self, event: str, **details: Any) -> None:
        fields = " ".join(f"{key}={value}" for key, value in sorted(details.items()))
        self.logger.log(self.level, f"{event} {fields}".rstrip())
