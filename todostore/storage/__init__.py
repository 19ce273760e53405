"""
Storage abstraction layer.
Provides one CRUD contract for todos with interchangeable backends.
"""
from .interface import StorageEngine
from .dialects import BaseDialect, DatabaseType, MySQLDialect, PostgreSQLDialect, SQLiteDialect
from .relational import RelationalEngine
from .document import DocumentEngine
from .factory import EngineFactory, build_engine

__all__ = [
    'StorageEngine',
    'BaseDialect',
    'DatabaseType',
    'MySQLDialect',
    'PostgreSQLDialect',
    'SQLiteDialect',
    'RelationalEngine',
    'DocumentEngine',
    'EngineFactory',
    'build_engine',
]
