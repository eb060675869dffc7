"""
Async Database Connection Management (SQLAlchemy 2.0+)

- Singleton Lifecycle: dispose() resets the singleton instance.
- URL from DB_CONFIG (PostgreSQL via asyncpg) or an explicit override
  (in-memory SQLite via aiosqlite for tests and local experiments).

Usage:
    engine = AsyncDatabaseEngine()
    await engine.initialize()
    async with engine.get_session() as session:
        ...
    await engine.dispose()
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from querystudy.common.config import DB_CONFIG, build_database_url, is_sqlite_url
from querystudy.common.models.base import Base

logger = logging.getLogger(__name__)


def create_engine_for_url(url: str, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """
    URL 종류에 맞는 옵션으로 AsyncEngine 을 생성합니다.

    인메모리 SQLite 는 커넥션마다 별도 DB 가 생기므로 StaticPool 로 하나의 커넥션을 공유합니다.
    """
    if is_sqlite_url(url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        url,
        echo=echo,
        pool_size=kwargs.get("pool_size", DB_CONFIG["pool_size"]),
        max_overflow=kwargs.get("max_overflow", DB_CONFIG["max_overflow"]),
        pool_recycle=kwargs.get("pool_recycle", DB_CONFIG["pool_recycle"]),
        pool_pre_ping=True,
    )


class AsyncDatabaseEngine:
    """
    Async Database Engine Manager (Singleton Pattern)

    Features:
        - Connection pooling with configurable limits
        - Automatic singleton reset on disposal (tests rely on it)
        - Context manager for session handling
    """

    _instance: Optional["AsyncDatabaseEngine"] = None
    _initialized: bool = False

    def __new__(cls) -> "AsyncDatabaseEngine":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker | None = None
        self._initialized = True

    async def initialize(self, url: str | None = None, echo: bool | None = None, **kwargs: Any) -> None:
        """
        Initialize the async engine.

        Args:
            url: Database URL. Defaults to build_database_url(DB_CONFIG).
            echo: Enable SQL query logging. Defaults to DB_CONFIG["echo"].
            **kwargs: Override pool settings (pool_size, max_overflow, pool_recycle)
        """
        if self.engine is not None:
            logger.warning("Engine already initialized, skipping re-initialization")
            return

        url = url or build_database_url()
        echo = DB_CONFIG["echo"] if echo is None else echo

        logger.info(f"Initializing AsyncEngine: {self._safe_url(url)}")

        try:
            self.engine = create_engine_for_url(url, echo=echo, **kwargs)
            self.session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
                autocommit=False,
            )

            await self.health_check()
            logger.info("AsyncEngine initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize AsyncEngine: {e}")
            await self.dispose()
            raise RuntimeError(f"Database initialization failed: {e}") from e

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional Session Context Manager.

        Usage:
            async with engine.get_session() as session:
                await session.execute(...)
                # Auto-commit on exit
        """
        if self.session_factory is None:
            raise RuntimeError("Engine not initialized. Call await engine.initialize() first.")

        session: AsyncSession = self.session_factory()

        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session transaction rolled back: {e}")
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Verify database connectivity."""
        if self.engine is None:
            raise RuntimeError("Engine not initialized")

        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise

    async def dispose(self) -> None:
        """Dispose the engine and RESET the singleton instance."""
        if self.engine:
            logger.info("Disposing AsyncEngine...")
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

        AsyncDatabaseEngine._instance = None
        self._initialized = False
        logger.debug("AsyncDatabaseEngine singleton reset")

    @staticmethod
    def _safe_url(url: str) -> str:
        # 비밀번호가 로그에 남지 않도록 user:password@ 부분을 가린다
        if "@" not in url:
            return url
        scheme, _, rest = url.partition("://")
        return f"{scheme}://***@{rest.split('@', 1)[1]}"


async def ensure_schema(engine: AsyncEngine, reset: bool = False) -> None:
    """
    Alembic 없이 모델 기반으로 스키마를 생성합니다.
    개발/테스트 환경에서만 사용하세요.
    """
    # 모델 등록을 위해 임포트 (Base.metadata 채우기)
    from querystudy.member import models as member_models  # noqa: F401

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Schema ready: {sorted(Base.metadata.tables.keys())}")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """세션 제너레이터 (의존성 주입용)."""
    db = AsyncDatabaseEngine()
    async with db.get_session() as session:
        yield session
