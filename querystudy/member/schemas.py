"""
Member 도메인 Pydantic Schemas

쿼리 결과를 엔티티 대신 평평한 형태로 받는 프로젝션 DTO 와 검색 조건.
DTO 는 식별자가 없고, 결과 행마다 새로 만들어진다.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================
# Projection DTO
# ============================================================
class MemberDto(BaseModel):
    """username, age 두 컬럼 프로젝션."""

    username: str | None = None
    age: int = 0

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def of(cls, username: str | None, age: int) -> "MemberDto":
        """위치 인자 생성자. select(Member.username, Member.age) 행을 그대로 풀어 넣는다."""
        return cls(username=username, age=age)


class UserDto(BaseModel):
    """필드명이 엔티티와 다른 DTO. username 을 name 으로 별칭(label)해서 조회해야 한다."""

    name: str | None = None
    age: int = 0

    model_config = ConfigDict(from_attributes=True)


class MemberTeamDto(BaseModel):
    """회원 + 소속 팀 조인 결과."""

    member_id: int
    username: str | None = None
    age: int
    team_id: int | None = None
    team_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Search Condition
# ============================================================
class MemberSearchCondition(BaseModel):
    """
    회원 검색 조건. 모든 필드는 선택이며, None 인 조건은 쿼리에서 제외된다.

    - username: 회원명 일치
    - team_name: 팀명 일치
    - age_goe: 나이 >= (greater or equal)
    - age_loe: 나이 <= (less or equal)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = Field(None, ge=0)
    age_loe: int | None = Field(None, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_age_range(self) -> "MemberSearchCondition":
        if self.age_goe is not None and self.age_loe is not None and self.age_goe > self.age_loe:
            raise ValueError(f"age_goe({self.age_goe}) must not exceed age_loe({self.age_loe})")
        return self

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())
