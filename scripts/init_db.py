"""
데이터베이스 테이블 초기화

Run: python scripts/init_db.py [--reset]
"""

import argparse
import asyncio
import logging

from querystudy.common.database import AsyncDatabaseEngine, ensure_schema


logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("DB_INIT")


async def init_db(reset: bool = False) -> None:
    """
    데이터베이스 테이블 초기화 함수

    Args:
        reset (bool): True일 경우 기존 테이블을 모두 삭제(Drop)하고 재생성
    """
    logger.info("Starting Database Initialization...")

    db = AsyncDatabaseEngine()
    await db.initialize()

    try:
        if reset:
            logger.warning("'--reset' flag detected. Dropping all existing tables...")
        await ensure_schema(db.engine, reset=reset)
        logger.info("Database initialization completed successfully!")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    finally:
        await db.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the database tables.")
    parser.add_argument(
        "--reset", action="store_true", help="CAUTION: Drop all tables before creation. Data will be lost."
    )
    args = parser.parse_args()

    try:
        asyncio.run(init_db(reset=args.reset))
    except KeyboardInterrupt:
        logger.info("Initialization stopped by user.")
