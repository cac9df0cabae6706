"""
factory.py
----------
Object factory that decides which ConnectionMaker the application uses and
wires data access objects with it. Swapping the database setup only
touches this module (or the .env it reads).
"""

from typing import Optional

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN, DB_POOLED
from db.connection import ConnectionMaker, PooledConnectionMaker, SimpleConnectionMaker
from repositories.user_dao import UserDao
from utils.logger import get_logger

logger = get_logger(__name__)


class DaoFactory:
    """
    Builds one shared ConnectionMaker and hands out DAOs that use it.

    Args:
        database_url: DSN to connect to (default: DATABASE_URL from config).
        pooled: Use a connection pool instead of one connection per call
            (default: DB_POOLED from config).
    """

    def __init__(self, database_url: Optional[str] = None, pooled: Optional[bool] = None):
        self.database_url = database_url or DATABASE_URL
        self.pooled = DB_POOLED if pooled is None else pooled
        self._connection_maker: Optional[ConnectionMaker] = None

    def connection_maker(self) -> ConnectionMaker:
        if self._connection_maker is None:
            if self.pooled:
                self._connection_maker = PooledConnectionMaker(
                    self.database_url, DB_POOL_MIN, DB_POOL_MAX
                )
            else:
                self._connection_maker = SimpleConnectionMaker(self.database_url)
            logger.info(f"Using {type(self._connection_maker).__name__}")
        return self._connection_maker

    def user_dao(self) -> UserDao:
        return UserDao(self.connection_maker())

    def close(self) -> None:
        """Release whatever the connection maker holds open."""
        if isinstance(self._connection_maker, PooledConnectionMaker):
            self._connection_maker.close()
        self._connection_maker = None
