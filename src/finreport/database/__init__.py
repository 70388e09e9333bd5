"""Database layer for finreport application."""

from finreport.database.base import Database
from finreport.database.factories import create_sqlite_database
from finreport.database.memory import InMemoryDatabase

__all__ = ["Database", "InMemoryDatabase", "create_sqlite_database"]
