"""
db/errors.py
------------
Exception hierarchy for the data access layer.

Driver exceptions (psycopg2.Error and friends) never leave the db/ and
repositories/ layers; they are translated into these types with the
original exception chained as ``__cause__``.
"""

from typing import Optional


class DataAccessError(Exception):
    """Base class for every failure raised by the data access layer."""


class PersistenceError(DataAccessError):
    """A write could not be completed (constraint violation, bad statement, no connection)."""


class ConnectionFailedError(PersistenceError):
    """
    A connection could not be provisioned.

    Raised by connection makers when the backend is unreachable, rejects the
    credentials, or the pool has no connection left to hand out.
    """


class DuplicateKeyError(PersistenceError):
    """An insert collided with an existing primary key."""

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"Record with id '{key}' already exists")


class NotFoundError(DataAccessError):
    """A lookup by key matched no row."""

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"No record found for id '{key}'")


class AmbiguousResultError(DataAccessError):
    """A lookup expected to match one row matched several."""

    def __init__(self, key: str, count: int, message: Optional[str] = None):
        self.key = key
        self.count = count
        super().__init__(message or f"Expected 1 record for id '{key}', got {count}")
