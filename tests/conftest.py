"""Shared fixtures."""

import pytest

from repositories.user_dao import UserDao
from tests.fakes import FakeConnectionMaker


@pytest.fixture
def connection_maker():
    return FakeConnectionMaker()


@pytest.fixture
def dao(connection_maker):
    user_dao = UserDao(connection_maker)
    yield user_dao
    user_dao.delete_all()
