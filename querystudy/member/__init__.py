"""
Member 도메인

Member, Team 엔티티와 프로젝션 DTO, Repository, Service.
"""

from .models import Member, Team
from .repositories import MemberRepository, TeamRepository
from .schemas import MemberDto, MemberSearchCondition, MemberTeamDto, UserDto
from .services import MemberService

__all__ = [
    "Member",
    "Team",
    "MemberDto",
    "UserDto",
    "MemberTeamDto",
    "MemberSearchCondition",
    "MemberRepository",
    "TeamRepository",
    "MemberService",
]
