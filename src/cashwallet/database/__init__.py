"""Database layer for cashwallet application."""

from cashwallet.database.base import Database
from cashwallet.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
