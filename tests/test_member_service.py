"""
MemberService 테스트

팀 배정(양방향 연관관계), 입력 검증, 검색, 벌크 연산 후 세션 정리.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.common.repositories.base_repository import EntityNotFound
from querystudy.member.models import Member, Team
from querystudy.member.schemas import MemberSearchCondition
from querystudy.member.services import SAMPLE_MEMBERS, MemberService


class TestMemberModel:
    def test_change_team_updates_both_sides(self):
        """Member.team 을 바꾸면 Team.members 도 함께 갱신된다."""
        team_a = Team(name="teamA")
        team_b = Team(name="teamB")
        member = Member(username="member1", age=10)

        member.change_team(team_a)
        assert member.team is team_a
        assert team_a.members == [member]

        member.change_team(team_b)
        assert team_a.members == []
        assert team_b.members == [member]

    def test_repr_excludes_relationship(self):
        member = Member(username="member1", age=10)

        assert repr(member) == "<Member(id=None, username='member1', age=10)>"
        assert member.to_dict()["username"] == "member1"


class TestMemberService:
    async def test_load_sample_data(self, member_service: MemberService, session: AsyncSession):
        teams = await member_service.load_sample_data()

        assert sorted(teams) == ["teamA", "teamB"]
        assert await member_service.member_repo.count() == len(SAMPLE_MEMBERS)

    async def test_create_team_blank_name(self, member_service: MemberService):
        with pytest.raises(ValueError, match="Team name"):
            await member_service.create_team("   ")

    async def test_join_negative_age(self, member_service: MemberService):
        with pytest.raises(ValueError, match="age"):
            await member_service.join("member1", -1)

    async def test_join_without_team(self, member_service: MemberService):
        member = await member_service.join(None, 0)

        assert member.id is not None
        assert member.username is None
        assert member.team_id is None

    async def test_change_team(self, member_service: MemberService, sample_data: dict[str, Team]):
        member1 = (await member_service.member_repo.find_by_username("member1"))[0]

        moved = await member_service.change_team(member1.id, "teamB")

        assert moved.team.name == "teamB"
        assert moved.team_id == sample_data["teamB"].id

    async def test_change_team_unknown(self, member_service: MemberService, sample_data: dict[str, Team]):
        member1 = (await member_service.member_repo.find_by_username("member1"))[0]

        with pytest.raises(EntityNotFound):
            await member_service.change_team(member1.id, "teamZ")
        with pytest.raises(EntityNotFound):
            await member_service.change_team(99999, "teamA")

    async def test_search_page(self, member_service: MemberService, sample_data: dict[str, Team]):
        page = await member_service.search_page(MemberSearchCondition(age_goe=20), offset=0, limit=2)

        assert [dto.username for dto in page.data] == ["member2", "member3"]
        assert page.total == 3

    async def test_search(self, member_service: MemberService, sample_data: dict[str, Team]):
        result = await member_service.search(MemberSearchCondition(username="member2"))

        assert [(dto.username, dto.team_name) for dto in result] == [("member2", "teamA")]


class TestMemberServiceBulk:
    async def test_rename_members_younger_than(
        self, member_service: MemberService, session: AsyncSession, sample_data: dict[str, Team]
    ):
        count = await member_service.rename_members_younger_than(28, "비회원")

        members = (await session.execute(select(Member).order_by(Member.id))).scalars().all()

        assert count == 2
        assert [m.username for m in members] == ["비회원", "비회원", "member3", "member4"]

    async def test_increase_all_ages(
        self, member_service: MemberService, session: AsyncSession, sample_data: dict[str, Team]
    ):
        count = await member_service.increase_all_ages()

        members = (await session.execute(select(Member).order_by(Member.id))).scalars().all()

        assert count == 4
        assert [m.age for m in members] == [11, 21, 31, 41]

    async def test_remove_members_older_than(
        self, member_service: MemberService, session: AsyncSession, sample_data: dict[str, Team]
    ):
        count = await member_service.remove_members_older_than(18)

        assert count == 3
        assert await member_service.member_repo.count() == 1

    async def test_bulk_flushes_pending_changes(
        self, member_service: MemberService, session: AsyncSession, sample_data: dict[str, Team]
    ):
        """flush 되지 않은 신규 회원도 벌크 연산 대상에 포함된다."""
        session.add(Member(username="pending", age=5))

        count = await member_service.rename_members_younger_than(28, "비회원")

        assert count == 3
