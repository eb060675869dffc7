"""
AsyncDatabaseEngine 싱글톤 / 세션 컨텍스트 테스트
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from querystudy.common.config import TEST_DATABASE_URL
from querystudy.common.database import AsyncDatabaseEngine, ensure_schema, get_db
from querystudy.member.models import Team


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncDatabaseEngine, None]:
    db = AsyncDatabaseEngine()
    await db.initialize(TEST_DATABASE_URL, echo=False)
    await ensure_schema(db.engine, reset=True)
    yield db
    await db.dispose()


class TestAsyncDatabaseEngine:
    async def test_singleton(self, db_engine: AsyncDatabaseEngine):
        assert AsyncDatabaseEngine() is db_engine
        assert await db_engine.health_check() is True

    async def test_initialize_twice_keeps_engine(self, db_engine: AsyncDatabaseEngine):
        engine = db_engine.engine

        await db_engine.initialize(TEST_DATABASE_URL)

        assert db_engine.engine is engine

    async def test_session_commits_on_exit(self, db_engine: AsyncDatabaseEngine):
        async with db_engine.get_session() as session:
            session.add(Team(name="teamA"))

        async with db_engine.get_session() as session:
            count = (await session.execute(select(func.count(Team.id)))).scalar_one()

        assert count == 1

    async def test_session_rolls_back_on_error(self, db_engine: AsyncDatabaseEngine):
        with pytest.raises(ValueError, match="boom"):
            async with db_engine.get_session() as session:
                session.add(Team(name="teamA"))
                await session.flush()
                raise ValueError("boom")

        async with db_engine.get_session() as session:
            count = (await session.execute(select(func.count(Team.id)))).scalar_one()

        assert count == 0

    async def test_get_db(self, db_engine: AsyncDatabaseEngine):
        async for session in get_db():
            assert (await session.execute(select(func.count(Team.id)))).scalar_one() == 0

    async def test_dispose_resets_singleton(self):
        db = AsyncDatabaseEngine()
        await db.initialize(TEST_DATABASE_URL)

        await db.dispose()

        assert db.engine is None
        assert AsyncDatabaseEngine() is not db

    async def test_session_before_initialize(self):
        db = AsyncDatabaseEngine()

        with pytest.raises(RuntimeError, match="not initialized"):
            async with db.get_session():
                pass

        await db.dispose()

    async def test_initialize_failure(self):
        db = AsyncDatabaseEngine()

        with pytest.raises(RuntimeError, match="initialization failed"):
            await db.initialize("sqlite+aiosqlite:////nonexistent-dir/querystudy.db")

        assert db.engine is None


def test_safe_url_masks_credentials():
    masked = AsyncDatabaseEngine._safe_url("postgresql+asyncpg://study:secret@db:5432/querystudy")

    assert masked == "postgresql+asyncpg://***@db:5432/querystudy"
    assert AsyncDatabaseEngine._safe_url("sqlite+aiosqlite://") == "sqlite+aiosqlite://"
