"""
pytest 공용 픽스처 모음

테스트 전략:
- 테스트 함수마다 새 인메모리 SQLite(aiosqlite) 엔진을 만들고 스키마를 생성
- 각 테스트는 외부 트랜잭션 안에서 실행되고 종료 시 ROLLBACK
- TEST_DATABASE_URL 로 PostgreSQL(asyncpg) 등 다른 DB 를 지정할 수 있음
"""

import logging
from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from querystudy.common.config import TEST_DATABASE_URL
from querystudy.common.database import create_engine_for_url, ensure_schema
from querystudy.member.models import Team
from querystudy.member.services import MemberService


logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


# ============================================================
# 1. 엔진 픽스처 (함수 스코프, 각 테스트마다 독립 생성)
# ============================================================
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트 전용 비동기 엔진. 생성 직후 스키마를 만든다."""
    _engine = create_engine_for_url(TEST_DATABASE_URL)
    await ensure_schema(_engine, reset=True)
    yield _engine
    await _engine.dispose()


# ============================================================
# 2. 각 테스트를 트랜잭션으로 격리 (핵심 픽스처)
# ============================================================
@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 새로운 격리된 AsyncSession 제공.

    autoflush=False 이므로 add() 후 쿼리 전에 flush() 를 직접 호출해야 한다.
    """
    async with engine.connect() as conn:
        await conn.begin()

        session_factory = async_sessionmaker(
            bind=conn, class_=AsyncSession, expire_on_commit=False, autoflush=False, autocommit=False
        )
        async_session = session_factory()

        try:
            yield async_session
        finally:
            await async_session.close()
            await conn.rollback()


# ============================================================
# 3. 공통 테스트 데이터 픽스처
# ============================================================
@pytest_asyncio.fixture
async def sample_data(session: AsyncSession) -> dict[str, Team]:
    """
    teamA: member1(10), member2(20)
    teamB: member3(30), member4(40)
    """
    return await MemberService.from_session(session).load_sample_data()


@pytest_asyncio.fixture
async def member_service(session: AsyncSession) -> MemberService:
    return MemberService.from_session(session)
