"""
repositories/user_dao.py
------------------------
Data access object for user records.
All SQL queries related to the `users` table live here.

The DAO does not know where its connections come from: a ConnectionMaker
is injected through the constructor and asked for a fresh connection on
every call.
"""

import psycopg2
from psycopg2 import errors

from db.connection import ConnectionMaker, connection_scope
from db.errors import (
    AmbiguousResultError,
    ConnectionFailedError,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError,
)
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

INSERT_SQL = "INSERT INTO users (id, name, password) VALUES (%s, %s, %s);"
SELECT_BY_ID_SQL = "SELECT id, name, password FROM users WHERE id = %s;"
SELECT_ALL_SQL = "SELECT id, name, password FROM users ORDER BY id;"
COUNT_SQL = "SELECT COUNT(*) FROM users;"
DELETE_ALL_SQL = "DELETE FROM users;"


class UserDao:
    """DAO for the users table."""

    def __init__(self, connection_maker: ConnectionMaker):
        self.connection_maker = connection_maker

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: User) -> None:
        """
        Insert a new user.

        Args:
            user: The User to persist.

        Raises:
            DuplicateKeyError: If a user with the same id already exists.
            ConnectionFailedError: If no connection could be acquired, or it
                dropped mid-statement.
            PersistenceError: If the insert fails for any other reason.
        """
        with connection_scope(self.connection_maker) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(INSERT_SQL, (user.id, user.name, user.password))
                conn.commit()
            except errors.UniqueViolation as e:
                self._rollback(conn)
                logger.error(f"Failed to add user '{user.id}': duplicate id")
                raise DuplicateKeyError(user.id) from e
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Failed to add user '{user.id}': {e}")
                raise self._translate(e, f"Failed to add user '{user.id}'") from e
        logger.info(f"Added user '{user.id}'")

    # ── READ ──────────────────────────────────────────────

    def get(self, user_id: str) -> User:
        """
        Fetch a single user by id.

        Args:
            user_id: Primary key.

        Returns:
            The stored User.

        Raises:
            NotFoundError: If no user has this id.
            AmbiguousResultError: If more than one row matches.
        """
        with connection_scope(self.connection_maker) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(SELECT_BY_ID_SQL, (user_id,))
                    rows = cur.fetchall()
            except psycopg2.Error as e:
                logger.error(f"Failed to fetch user '{user_id}': {e}")
                raise self._translate(e, f"Failed to fetch user '{user_id}'") from e

        if not rows:
            raise NotFoundError(user_id)
        if len(rows) > 1:
            logger.error(f"Lookup for user '{user_id}' matched {len(rows)} rows")
            raise AmbiguousResultError(user_id, len(rows))
        return self._row_to_user(rows[0])

    def get_all(self) -> list[User]:
        """Get every user, ordered by id."""
        with connection_scope(self.connection_maker) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(SELECT_ALL_SQL)
                    return [self._row_to_user(r) for r in cur.fetchall()]
            except psycopg2.Error as e:
                logger.error(f"Failed to list users: {e}")
                raise self._translate(e, "Failed to list users") from e

    def get_count(self) -> int:
        """Count the stored users."""
        with connection_scope(self.connection_maker) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(COUNT_SQL)
                    return int(cur.fetchone()[0])
            except psycopg2.Error as e:
                logger.error(f"Failed to count users: {e}")
                raise self._translate(e, "Failed to count users") from e

    # ── DELETE ────────────────────────────────────────────

    def delete_all(self) -> None:
        """Remove every user. Meant for resetting state between test runs."""
        with connection_scope(self.connection_maker) as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(DELETE_ALL_SQL)
                conn.commit()
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Failed to delete users: {e}")
                raise self._translate(e, "Failed to delete users") from e
        logger.info("Deleted all users")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(id=row[0], name=row[1], password=row[2])

    @staticmethod
    def _rollback(conn) -> None:
        """Roll back, logging instead of raising when the connection is already gone."""
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed: {e}")

    @staticmethod
    def _translate(error: psycopg2.Error, message: str) -> PersistenceError:
        """Map a driver error to the matching data access error."""
        if isinstance(error, (psycopg2.OperationalError, psycopg2.InterfaceError)):
            return ConnectionFailedError(f"{message}: {error}")
        return PersistenceError(f"{message}: {error}")
