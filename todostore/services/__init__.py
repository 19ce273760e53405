"""
Service layer for business logic.
Services contain pure business logic without front-end dependencies.
"""

from todostore.services.audit import AuditHook, LoggingAuditHook
from todostore.services.todo_service import TodoService

__all__ = ["TodoService", "AuditHook", "LoggingAuditHook"]
