"""
Result projection helpers.

select() 결과 행(Row)을 DTO 로 바꾸는 방법들:

1. ``to_dto_by_attributes`` - Row 의 속성(라벨)을 DTO 필드 이름과 맞춰 채운다.
2. ``to_dto_by_fields``     - Row 를 라벨 -> 값 매핑으로 보고 DTO 필드에 넣는다.
3. DTO 의 위치 인자 생성자(``MemberDto.of(*row)``) - 컬럼 순서와 타입이 맞아야 한다.
4. ``DtoBundle``            - 쿼리 자체가 DTO 를 반환하도록 select() 에 넣는 프로젝션.
                              컬럼 이름이 DTO 필드와 맞지 않으면 실행 시점이 아니라
                              첫 결과 행을 만들 때 pydantic 검증 오류로 드러난다.

1, 2 번은 라벨이 필드명과 다르면 ``.label("name")`` 으로 맞춰야 한다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import Row
from sqlalchemy.orm import Bundle

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)


def to_dto_by_attributes(dto_type: type[D], row: Row[Any]) -> D:
    return dto_type.model_validate(row, from_attributes=True)


def to_dto_by_fields(dto_type: type[D], row: Row[Any]) -> D:
    return dto_type.model_validate(dict(row._mapping))


def to_dtos(dto_type: type[D], rows: Iterable[Row[Any]], by: Callable[[type[D], Row[Any]], D] = to_dto_by_fields) -> list[D]:
    return [by(dto_type, row) for row in rows]


class DtoBundle(Bundle):
    """
    select() 에 넣으면 결과 행 하나가 DTO 인스턴스 하나로 반환되는 Bundle.

    Usage:
        stmt = select(DtoBundle(MemberDto, Member.username, Member.age))
        dtos = (await session.execute(stmt)).scalars().all()

    각 컬럼의 라벨(컬럼 이름 또는 .label() 로 지정한 이름)이 DTO 필드명으로 사용된다.
    """

    def __init__(self, dto_type: type[BaseModel], *exprs: Any, name: str | None = None, **kw: Any) -> None:
        super().__init__(name or dto_type.__name__, *exprs, **kw)
        self.dto_type = dto_type

    def create_row_processor(self, query: Any, procs: Sequence[Callable[[Any], Any]], labels: Sequence[str]) -> Callable[[Any], BaseModel]:
        dto_type = self.dto_type

        def proc(row: Any) -> BaseModel:
            return dto_type(**{label: p(row) for label, p in zip(labels, procs)})

        return proc
