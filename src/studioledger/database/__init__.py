"""Database layer for studioledger application."""

from studioledger.database.base import Database
from studioledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
