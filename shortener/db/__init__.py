"""
Database module with abstraction layer.

- DatabaseAdapter interface: backend-specific behaviour
- SQLiteAdapter: SQLite implementation (default)
- Database: engine and session factory, created once per application
"""

from shortener.db.interface import DatabaseAdapter
from shortener.db.models import DEFAULT_QUOTE, Link
from shortener.db.session import Database, get_session

__all__ = [
    "DEFAULT_QUOTE",
    "Database",
    "DatabaseAdapter",
    "Link",
    "get_session",
]
