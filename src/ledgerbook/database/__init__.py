"""Database layer for ledgerbook application."""

from ledgerbook.database.base import Database
from ledgerbook.database.changes import ChangeEvent, ChangeKind, Subscription
from ledgerbook.database.factories import create_sqlite_database

__all__ = ["Database", "ChangeEvent", "ChangeKind", "Subscription", "create_sqlite_database"]
