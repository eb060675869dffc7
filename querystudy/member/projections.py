from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute

from querystudy.common.projections import DtoBundle
from querystudy.member.schemas import MemberDto, MemberTeamDto

ColumnArg = InstrumentedAttribute[Any] | ColumnElement[Any]


class MemberDtoProjection(DtoBundle):
    """
    MemberDto 전용 프로젝션.

    생성자 인자 순서가 MemberDto 필드에 고정되어 있어서, 어떤 컬럼을 넘기든
    username / age 라벨이 붙는다.

        select(MemberDtoProjection(Member.username, Member.age))
    """

    def __init__(self, username: ColumnArg, age: ColumnArg) -> None:
        super().__init__(MemberDto, username.label("username"), age.label("age"), name="member_dto")


class MemberTeamDtoProjection(DtoBundle):
    def __init__(
        self,
        member_id: ColumnArg,
        username: ColumnArg,
        age: ColumnArg,
        team_id: ColumnArg,
        team_name: ColumnArg,
    ) -> None:
        super().__init__(
            MemberTeamDto,
            member_id.label("member_id"),
            username.label("username"),
            age.label("age"),
            team_id.label("team_id"),
            team_name.label("team_name"),
            name="member_team_dto",
        )
