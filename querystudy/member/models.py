"""
Member & Team 도메인 모델

테이블:
    - team: 팀
    - member: 회원 (team_id FK 로 연관관계의 주인)
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querystudy.common.models.base import Base


# ============================================================
# Team
# ============================================================
class Team(Base):
    """
    팀 엔티티.

    members 는 연관관계의 반대편(읽기 전용 역방향 컬렉션)이다.
    외래 키는 Member.team_id 가 관리한다.
    """

    __tablename__ = "team"

    id: Mapped[int] = mapped_column("team_id", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    members: Mapped[list[Member]] = relationship("Member", back_populates="team", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name={self.name!r})>"


# ============================================================
# Member
# ============================================================
class Member(Base):
    """
    회원 엔티티.

    username 은 NULL 을 허용하며 정렬 시 nulls last 예제에 사용된다.
    team 은 지연 로딩(lazy="select")이므로, 비동기 세션에서 접근하려면
    fetch join(contains_eager/joinedload)으로 함께 조회해야 한다.
    """

    __tablename__ = "member"

    id: Mapped[int] = mapped_column("member_id", Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    team_id: Mapped[int | None] = mapped_column(ForeignKey("team.team_id"), nullable=True, index=True)

    # Relationships
    team: Mapped[Team | None] = relationship("Team", back_populates="members", lazy="select")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경한다. back_populates 로 Team.members 도 함께 갱신된다."""
        self.team = team

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, username={self.username!r}, age={self.age})>"
