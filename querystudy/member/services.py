"""
Member 도메인 Service

회원 가입/팀 배정, 검색, 벌크 연산 후 영속성 컨텍스트 정리.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.common.repositories.base_repository import EntityNotFound
from querystudy.common.schemas import PageRequest, PagedResponse
from querystudy.member.models import Member, Team
from querystudy.member.repositories import MemberRepository, TeamRepository
from querystudy.member.schemas import MemberSearchCondition, MemberTeamDto


logger = logging.getLogger(__name__)

# 예제 전반에서 사용하는 기본 데이터: 팀 2개, 회원 4명
SAMPLE_TEAMS: tuple[str, ...] = ("teamA", "teamB")
SAMPLE_MEMBERS: tuple[tuple[str, int, str], ...] = (
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
)


class MemberService:
    """
    회원 서비스.

    벌크 연산은 identity map 을 우회하므로, 이 서비스의 벌크 메서드는
    실행 직후 세션을 비워(expunge_all) 이후 조회가 DB 값을 읽도록 한다.
    """

    def __init__(self, member_repo: MemberRepository, team_repo: TeamRepository) -> None:
        self.member_repo = member_repo
        self.team_repo = team_repo

    @classmethod
    def from_session(cls, session: AsyncSession) -> "MemberService":
        """AsyncSession으로부터 서비스 인스턴스를 생성한다."""
        return cls(member_repo=MemberRepository(session), team_repo=TeamRepository(session))

    @property
    def session(self) -> AsyncSession:
        return self.member_repo.session

    async def create_team(self, name: str) -> Team:
        """
        팀을 생성한다.

        Raises:
            ValueError: 팀 이름이 비어 있는 경우
        """
        if not name or not name.strip():
            raise ValueError("Team name cannot be empty")
        return await self.team_repo.create(Team(name=name.strip()))

    async def join(self, username: str | None, age: int = 0, team: Team | None = None) -> Member:
        """
        회원을 등록하고, 팀이 주어지면 배정한다.

        Raises:
            ValueError: 나이가 음수인 경우
        """
        if age < 0:
            raise ValueError(f"age must not be negative: {age}")

        member = Member(username=username, age=age)
        if team is not None:
            member.change_team(team)
        return await self.member_repo.create(member)

    async def change_team(self, member_id: int, team_name: str) -> Member:
        """
        회원의 소속 팀을 변경한다.

        Raises:
            EntityNotFound: 회원 또는 팀이 존재하지 않는 경우
        """
        member = await self.member_repo.get_with_team(member_id)
        if member is None:
            raise EntityNotFound(f"Member(id={member_id}) 이(가) 존재하지 않습니다.")

        team = await self.team_repo.get_by_name(team_name)
        if team is None:
            raise EntityNotFound(f"Team(name={team_name!r}) 이(가) 존재하지 않습니다.")

        member.change_team(team)
        await self.session.flush()
        return member

    async def load_sample_data(self) -> dict[str, Team]:
        """teamA(member1, member2), teamB(member3, member4) 기본 데이터를 저장한다."""
        teams = {name: await self.create_team(name) for name in SAMPLE_TEAMS}
        for username, age, team_name in SAMPLE_MEMBERS:
            await self.join(username, age, teams[team_name])

        logger.info(f"Sample data loaded: {len(SAMPLE_TEAMS)} teams, {len(SAMPLE_MEMBERS)} members")
        return teams

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    async def search(self, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        return await self.member_repo.search(condition)

    async def search_page(
        self, condition: MemberSearchCondition, offset: int = 0, limit: int = 10
    ) -> PagedResponse[MemberTeamDto]:
        return await self.member_repo.search_page_complex(condition, PageRequest(offset=offset, limit=limit))

    # ------------------------------------------------------------------
    # 벌크 연산
    # ------------------------------------------------------------------
    async def rename_members_younger_than(self, age: int, username: str) -> int:
        count = await self.member_repo.bulk_update_username(username, age_lt=age)
        self._clear_persistence_context()
        return count

    async def increase_all_ages(self, delta: int = 1) -> int:
        count = await self.member_repo.bulk_add_age(delta)
        self._clear_persistence_context()
        return count

    async def remove_members_older_than(self, age: int) -> int:
        count = await self.member_repo.bulk_delete_older_than(age)
        self._clear_persistence_context()
        return count

    def _clear_persistence_context(self) -> None:
        # flush 는 벌크 실행 전에 이미 일어났으므로 여기서는 비우기만 한다
        self.session.expunge_all()
