"""
Dynamic predicate composition.

Two styles for building a WHERE clause out of optional search parameters:

1. ``BooleanBuilder`` - start empty and accumulate conditions one by one.
2. Optional condition helpers returning ``None`` when their parameter is
   absent, combined with ``all_of`` / ``any_of`` / ``where_clause`` which
   drop the ``None`` entries.

Both produce plain ``ColumnElement[bool]`` objects usable in
``select(...).where(...)``, ``update(...).where(...)`` and
``delete(...).where(...)``.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import ColumnElement, and_, not_, or_, true

Predicate = ColumnElement[bool]


def _present(predicates: Iterable[Predicate | None]) -> list[Predicate]:
    return [p for p in predicates if p is not None]


def all_of(*predicates: Predicate | None) -> Predicate | None:
    """AND the non-None predicates. Returns None when nothing is left."""
    present = _present(predicates)
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


def any_of(*predicates: Predicate | None) -> Predicate | None:
    """OR the non-None predicates. Returns None when nothing is left."""
    present = _present(predicates)
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return or_(*present)


def where_clause(*predicates: Predicate | None) -> Predicate:
    """
    AND the non-None predicates into a clause that is always safe to pass to
    ``.where()``. An empty input matches every row.
    """
    present = _present(predicates)
    return and_(*present) if present else true()


class BooleanBuilder:
    """
    Mutable predicate accumulator.

    Usage:
        builder = BooleanBuilder()
        if username is not None:
            builder.and_(Member.username == username)
        if age is not None:
            builder.and_(Member.age == age)
        stmt = select(Member).where(builder)

    ``None`` operands are ignored, so optional helpers can be chained
    directly: ``builder.and_(username_eq(u)).and_(age_eq(a))``.
    """

    def __init__(self, initial: Predicate | None = None) -> None:
        self._predicate: Predicate | None = initial

    def and_(self, right: Predicate | None) -> "BooleanBuilder":
        if right is not None:
            self._predicate = right if self._predicate is None else and_(self._predicate, right)
        return self

    def or_(self, right: Predicate | None) -> "BooleanBuilder":
        if right is not None:
            self._predicate = right if self._predicate is None else or_(self._predicate, right)
        return self

    def and_not(self, right: Predicate | None) -> "BooleanBuilder":
        if right is None:
            return self
        return self.and_(not_(right))

    def or_not(self, right: Predicate | None) -> "BooleanBuilder":
        if right is None:
            return self
        return self.or_(not_(right))

    def not_(self) -> "BooleanBuilder":
        if self._predicate is not None:
            self._predicate = not_(self._predicate)
        return self

    def has_value(self) -> bool:
        return self._predicate is not None

    def get_value(self) -> Predicate | None:
        return self._predicate

    def __clause_element__(self) -> Predicate:
        # 조건이 하나도 없으면 전체 행과 매칭
        return self._predicate if self._predicate is not None else true()

    def __repr__(self) -> str:
        return f"<BooleanBuilder {self._predicate!s}>" if self._predicate is not None else "<BooleanBuilder empty>"
