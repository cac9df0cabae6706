"""
main.py
-------
Entry point: initializes the schema, then stores a user and reads it back.

    python main.py
"""

import sys

from db.errors import DataAccessError
from db.init_db import create_tables
from factory import DaoFactory
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> int:
    factory = DaoFactory()
    try:
        create_tables(factory.connection_maker())
        dao = factory.user_dao()

        user = User(id="1", name="홍길동", password="password123")
        dao.delete_all()
        dao.add(user)
        logger.info(f"{user.id} 등록 성공")

        stored = dao.get(user.id)
        logger.info(f"Fetched {stored}")
        if stored != user:
            logger.error(f"Round trip mismatch: stored {stored!r}, expected {user!r}")
            return 1
        logger.info(f"{stored.id} 조회 성공")
        return 0
    except DataAccessError as e:
        logger.error(f"Database error: {e}")
        return 1
    finally:
        factory.close()


if __name__ == "__main__":
    sys.exit(main())
