"""
Member 도메인 Repositories

- TeamRepository: 팀 CRUD
- MemberRepository: 회원 CRUD + 파생 쿼리(find_by_username) + 술어 실행
  + 사용자 정의 검색(search, search_page_simple, search_page_complex)
  + 동적 쿼리 두 가지 방식 + 벌크 연산
"""

import logging
from collections.abc import Sequence

from sqlalchemy import ColumnElement, Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from querystudy.common.predicates import BooleanBuilder, where_clause
from querystudy.common.repositories.base_repository import BaseRepository, RepositoryError
from querystudy.common.schemas import PageRequest, PagedResponse
from querystudy.member.models import Member, Team
from querystudy.member.predicates import age_eq, age_goe, age_loe, team_name_eq, username_eq
from querystudy.member.projections import MemberTeamDtoProjection
from querystudy.member.schemas import MemberSearchCondition, MemberTeamDto


logger = logging.getLogger(__name__)


# ============================================================
# Team Repository
# ============================================================
class TeamRepository(BaseRepository[Team]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Team, session)

    async def get_by_name(self, name: str) -> Team | None:
        stmt = select(self.model).where(self.model.name == name)
        result = await self.session.execute(stmt)
        return result.scalars().first()


# ============================================================
# Member Repository
# ============================================================
class MemberRepository(BaseRepository[Member]):
    """
    회원 Repository.

    find_all_by/count_by 같은 술어 실행은 조인을 표현할 수 없으므로,
    팀 조건이 필요한 검색은 search() 계열 메서드를 사용한다.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Member, session)

    async def find_by_username(self, username: str) -> Sequence[Member]:
        stmt = select(self.model).where(self.model.username == username).order_by(self.model.id)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_with_team(self, member_id: int) -> Member | None:
        """회원을 팀과 함께(fetch join) 조회한다."""
        stmt = (
            select(Member)
            .outerjoin(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.id == member_id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().unique().one_or_none()

    # ------------------------------------------------------------------
    # 사용자 정의 검색
    # ------------------------------------------------------------------
    @staticmethod
    def _search_predicate(condition: MemberSearchCondition) -> ColumnElement[bool]:
        return where_clause(
            username_eq(condition.username),
            team_name_eq(condition.team_name),
            age_goe(condition.age_goe),
            age_loe(condition.age_loe),
        )

    def _search_query(self, condition: MemberSearchCondition) -> Select:
        return (
            select(MemberTeamDtoProjection(Member.id, Member.username, Member.age, Team.id, Team.name))
            .select_from(Member)
            .outerjoin(Member.team)
            .where(self._search_predicate(condition))
        )

    def _count_query(self, condition: MemberSearchCondition) -> Select:
        return (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Member.team)
            .where(self._search_predicate(condition))
        )

    async def search(self, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        """조건에 맞는 회원을 팀 정보와 함께 DTO 로 조회한다 (회원 id 순)."""
        try:
            stmt = self._search_query(condition).order_by(Member.id)
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error searching members with {condition!r}: {e}")
            raise RepositoryError(f"Failed to search members: {e}") from e

    async def search_page_simple(
        self, condition: MemberSearchCondition, page: PageRequest
    ) -> PagedResponse[MemberTeamDto]:
        """내용 쿼리와 카운트 쿼리를 항상 함께 실행한다."""
        stmt = self._search_query(condition).order_by(Member.id).offset(page.offset).limit(page.limit)
        content = list((await self.session.execute(stmt)).scalars().all())
        total = (await self.session.execute(self._count_query(condition))).scalar_one()
        return PagedResponse[MemberTeamDto].of(content, total, page)

    async def search_page_complex(
        self, condition: MemberSearchCondition, page: PageRequest
    ) -> PagedResponse[MemberTeamDto]:
        """
        내용 쿼리를 먼저 실행하고, 전체 개수를 내용만으로 알 수 있으면 카운트 쿼리를 생략한다.

        - 첫 페이지인데 내용이 페이지 크기보다 적을 때
        - 마지막 페이지일 때 (내용이 있고 페이지 크기보다 적을 때)
        """
        stmt = self._search_query(condition).order_by(Member.id).offset(page.offset).limit(page.limit)
        content = list((await self.session.execute(stmt)).scalars().all())

        if page.offset == 0 and len(content) < page.limit:
            total = len(content)
        elif 0 < len(content) < page.limit:
            total = page.offset + len(content)
        else:
            total = (await self.session.execute(self._count_query(condition))).scalar_one()
            logger.debug(f"Count query executed for page offset={page.offset}: total={total}")

        return PagedResponse[MemberTeamDto].of(content, total, page)

    # ------------------------------------------------------------------
    # 동적 쿼리
    # ------------------------------------------------------------------
    async def search_by_builder(self, username: str | None, age: int | None) -> Sequence[Member]:
        """BooleanBuilder 방식: 값이 있는 조건만 누적한다."""
        builder = BooleanBuilder()
        if username is not None:
            builder.and_(Member.username == username)
        if age is not None:
            builder.and_(Member.age == age)

        stmt = select(Member).where(builder).order_by(Member.id)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def search_by_where_params(self, username: str | None, age: int | None) -> Sequence[Member]:
        """where 다중 파라미터 방식: None 을 반환한 조건은 무시된다."""
        stmt = select(Member).where(where_clause(username_eq(username), age_eq(age))).order_by(Member.id)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    # ------------------------------------------------------------------
    # 벌크 연산
    # 영속성 컨텍스트(identity map)를 거치지 않고 DB 에 바로 반영된다.
    # 실행 전에 flush 해서 대기 중인 변경이 먼저 DB 에 반영되도록 한다.
    # 이미 로딩된 객체는 이전 값을 유지하므로, 호출 후 세션을 비우거나(expunge_all)
    # populate_existing 으로 다시 조회해야 최신 값을 볼 수 있다.
    # ------------------------------------------------------------------
    async def bulk_update_username(self, username: str, age_lt: int) -> int:
        await self.session.flush()
        stmt = (
            update(Member)
            .where(Member.age < age_lt)
            .values(username=username)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        logger.info(f"Bulk update: username={username!r} for age < {age_lt} ({result.rowcount} rows)")
        return result.rowcount

    async def bulk_add_age(self, delta: int = 1) -> int:
        await self.session.flush()
        stmt = update(Member).values(age=Member.age + delta).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        logger.info(f"Bulk update: age += {delta} ({result.rowcount} rows)")
        return result.rowcount

    async def bulk_delete_older_than(self, age_gt: int) -> int:
        await self.session.flush()
        stmt = delete(Member).where(Member.age > age_gt).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        logger.info(f"Bulk delete: age > {age_gt} ({result.rowcount} rows)")
        return result.rowcount
