"""
예제용 기본 데이터(teamA: member1, member2 / teamB: member3, member4)를 저장한다.

Run: python scripts/seed_sample.py [--create-schema]
"""

import argparse
import asyncio
import logging

from querystudy.common.database import AsyncDatabaseEngine, ensure_schema
from querystudy.member.services import MemberService


logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("SEED")


async def seed(create_schema: bool = False) -> None:
    db = AsyncDatabaseEngine()
    await db.initialize()

    try:
        if create_schema:
            await ensure_schema(db.engine)

        async with db.get_session() as session:
            service = MemberService.from_session(session)
            if await service.team_repo.get_by_name("teamA") is not None:
                logger.info("Sample data already present, skipping.")
                return
            teams = await service.load_sample_data()

        logger.info(f"Seeded teams: {sorted(teams)}")
    finally:
        await db.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Insert the two-team / four-member sample data.")
    parser.add_argument("--create-schema", action="store_true", help="Create tables before seeding.")
    args = parser.parse_args()

    asyncio.run(seed(create_schema=args.create_schema))
