"""Database package for the pay API.

This package provides database connection utilities.
"""

from .connection import borrow_db_session, dispose_db, get_engine, is_healthy

__all__ = [
    "borrow_db_session",
    "dispose_db",
    "get_engine",
    "is_healthy",
]
