"""
Member 검색용 조건 헬퍼.

모든 헬퍼는 인자가 None 이면 None 을 반환한다. where_clause()/all_of() 와
BooleanBuilder 가 None 을 건너뛰므로, 호출하는 쪽에서 if 분기를 둘 필요가 없다.
team_name_eq 는 Team 컬럼을 참조하므로 Member.team 조인이 있는 쿼리에서만 쓴다.
"""

from sqlalchemy import ColumnElement

from querystudy.common.predicates import all_of
from querystudy.member.models import Member, Team


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if username is not None else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if team_name is not None else None


def age_eq(age: int | None) -> ColumnElement[bool] | None:
    return Member.age == age if age is not None else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def age_between(age_goe_: int | None, age_loe_: int | None) -> ColumnElement[bool] | None:
    return all_of(age_goe(age_goe_), age_loe(age_loe_))


def all_eq(username: str | None, age: int | None) -> ColumnElement[bool] | None:
    """username_eq 와 age_eq 를 조합한 조건. 둘 다 None 이면 None."""
    return all_of(username_eq(username), age_eq(age))
