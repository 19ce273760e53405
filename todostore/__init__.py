"""
todostore - todo records on interchangeable storage backends.
"""
from todostore.models import Todo
from todostore.services import TodoService
from todostore.storage import StorageEngine, build_engine

__version__ = "0.1.0"

__all__ = ["Todo", "TodoService", "StorageEngine", "build_engine", "__version__"]
