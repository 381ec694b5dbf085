"""Shared fixtures for database tests."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from ormkit.database import Database, Repository
from ormkit.database.implementations import FakeConnection

from tests.database.models import User


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[Database, None]:
    """In-memory SQLite database with the users table created."""
    database = await Database.open_local()
    await database.execute(User.migration_sql())
    yield database
    await database.close()


@pytest.fixture
def user_repo(db: Database) -> Repository[User]:
    """Create a user repository on the in-memory database."""
    return Repository(User, db)


@pytest.fixture
def fake_connection() -> FakeConnection:
    """Statement-recording connection."""
    return FakeConnection()


@pytest_asyncio.fixture
async def fake_db(fake_connection: FakeConnection) -> AsyncGenerator[Database, None]:
    """Database handle over the fake connection."""
    database = Database(fake_connection)
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
def sample_users() -> list[User]:
    """Five users with distinct ages."""
    return [
        User(name="Alice", email="alice@example.com", age=25, score=88.5),
        User(name="Bob", email="bob@example.com", age=30, score=72.0),
        User(name="Charlie", email="charlie@example.com", age=35, is_active=False),
        User(name="Diana", email="diana@example.com", age=40, score=95.25),
        User(name="Eve", email="eve@example.com", age=None),
    ]
