"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionMaker, connection_scope
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: one row per registered user, keyed by a caller-chosen id
CREATE TABLE IF NOT EXISTS users (
    id              TEXT PRIMARY KEY,
    name            TEXT NOT NULL,
    password        TEXT NOT NULL
);
"""


def create_tables(connection_maker: ConnectionMaker) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        connection_maker: Strategy used to obtain the connection.
    """
    with connection_scope(connection_maker) as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()
            logger.info("Database schema initialized successfully.")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise


if __name__ == "__main__":
    from config import DATABASE_URL
    from db.connection import SimpleConnectionMaker
    create_tables(SimpleConnectionMaker(DATABASE_URL))
    print("✅ Database schema created successfully.")
