from __future__ import annotations

from typing import Any

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """모든 도메인 모델의 최상위 Base 클래스."""

    __abstract__ = True
    type_annotation_map = {}

    id: Any

    def to_dict(self) -> dict[str, Any]:
        """모델 객체를 컬럼 이름 기준 딕셔너리로 변환합니다."""
        return {c.key: getattr(self, c.key) for c in self.__mapper__.column_attrs}

    def __repr__(self) -> str:
        """
        디버깅용 객체 문자열을 반환합니다.
        연관관계는 지연 로딩을 유발하므로 컬럼 값만 출력합니다.
        """
        cols = []
        for attr in self.__mapper__.column_attrs:
            val = getattr(self, attr.key)
            if isinstance(val, str) and len(val) > 20:
                val = val[:17] + "..."
            cols.append(f"{attr.key}={val}")

        return f"<{self.__class__.__name__} {', '.join(cols)}>"
