"""
Общие фикстуры: SQLite-база через aiosqlite и хранилище поверх нее.
"""

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine

from user_service.db import models  # noqa: F401
from user_service.db.database import Base, create_session_factory
from user_service.db.store import UserStore


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Фикстура: файл SQLite с включенными внешними ключами (нужны для каскада)."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(engine) -> UserStore:
    return UserStore(create_session_factory(engine))
