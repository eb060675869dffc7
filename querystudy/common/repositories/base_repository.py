import logging
from abc import ABC
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, exists, func, select
from sqlalchemy.exc import IntegrityError, MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.common.models import Base
from querystudy.common.predicates import where_clause

logger = logging.getLogger(__name__)

# Type variable for model classes
T = TypeVar("T", bound=Base)


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFound(RepositoryException):
    """Raised when entity is not found."""

    pass


class DuplicateEntity(RepositoryException):
    """Raised when duplicate entity creation is attempted."""

    pass


class RepositoryError(RepositoryException):
    """Generic repository operation error."""

    pass


class BaseRepository(ABC, Generic[T]):
    """
    Generic CRUD + predicate execution on top of AsyncSession.

    CRUD 메서드는 flush 까지만 수행하고 commit 은 세션 소유자(get_session 등)에 맡긴다.
    """

    def __init__(self, model: type[T], session: AsyncSession) -> None:
        if model is None:
            raise ValueError("Model cannot be None")
        if session is None:
            raise ValueError("AsyncSession cannot be None")

        self.model: type[T] = model
        self.session: AsyncSession = session
        logger.debug(f"Initialized {self.__class__.__name__} for model {self.model.__name__}")

    async def get(self, id: Any) -> T | None:
        try:
            query = select(self.model).where(self.model.id == id)
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error getting {self.model.__name__} by id {id}: {e}")
            raise RepositoryError(f"Failed to get entity: {e}") from e

    async def get_or_raise(self, id: Any) -> T:
        db_obj = await self.get(id)
        if db_obj is None:
            raise EntityNotFound(f"{self.model.__name__} with id {id} not found")
        return db_obj

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> Sequence[T]:
        stmt = select(self.model)

        if order_by:
            if not hasattr(self.model, order_by):
                logger.warning(f"Invalid order_by column: {order_by}")
            else:
                order_col = getattr(self.model, order_by)
                stmt = stmt.order_by(order_col.asc()) if ascending else stmt.order_by(order_col.desc())

        stmt = stmt.offset(skip).limit(limit)

        try:
            result = await self.session.execute(stmt)
            return result.scalars().all()

        except Exception as e:
            logger.error(f"Error listing {self.model.__name__}: {e}")
            raise RepositoryError(f"Failed to list entities: {e}") from e

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Predicate execution
    # ------------------------------------------------------------------
    async def find_all_by(self, *predicates: ColumnElement[bool] | None, order_by: Any = None) -> Sequence[T]:
        """
        술어(predicate)로 엔티티를 조회한다. None 술어는 무시된다.

        조인이 필요한 조건은 표현할 수 없으므로, 조인이 필요하면 전용 쿼리 메서드를 작성한다.
        """
        stmt = select(self.model).where(where_clause(*predicates))
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def find_one_by(self, *predicates: ColumnElement[bool] | None) -> T | None:
        """
        술어와 일치하는 단 하나의 엔티티를 조회한다.

        Raises:
            MultipleResultsFound: 두 건 이상 일치하는 경우
        """
        stmt = select(self.model).where(where_clause(*predicates))
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except MultipleResultsFound:
            logger.debug(f"Non-unique result for {self.model.__name__} predicate")
            raise

    async def count_by(self, *predicates: ColumnElement[bool] | None) -> int:
        stmt = select(func.count()).select_from(self.model).where(where_clause(*predicates))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def exists_by(self, *predicates: ColumnElement[bool] | None) -> bool:
        stmt = select(exists().where(where_clause(*predicates)).select_from(self.model))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def create(self, obj_in: T | dict[str, Any]) -> T:
        db_obj = self.model(**obj_in) if isinstance(obj_in, dict) else obj_in
        self.session.add(db_obj)

        try:
            await self.session.flush()
            return db_obj

        except IntegrityError as e:
            pgcode = getattr(e.orig, "pgcode", None) or getattr(e.orig, "sqlstate", None)

            if pgcode == "23505" or "unique" in str(e).lower():
                logger.warning(f"Duplicate entity detected: {e}")
                raise DuplicateEntity(f"{self.model.__name__} already exists.") from e

            logger.error(f"Integrity Error creating {self.model.__name__}: {e}")
            raise RepositoryError(f"Database integrity error: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error creating {self.model.__name__}: {e}")
            raise RepositoryError(f"Failed to create entity: {e}") from e

    async def create_all(self, objs: Iterable[T]) -> list[T]:
        db_objs = list(objs)
        self.session.add_all(db_objs)
        try:
            await self.session.flush()
            return db_objs
        except Exception as e:
            logger.error(f"Error creating {len(db_objs)} {self.model.__name__} rows: {e}")
            raise RepositoryError(f"Failed to create entities: {e}") from e

    async def update(self, id: Any, obj_in: dict[str, Any] | Any) -> T:
        update_data = (
            obj_in
            if isinstance(obj_in, dict)
            else obj_in.model_dump(exclude_unset=True)
            if hasattr(obj_in, "model_dump")
            else obj_in.__dict__
        )
        try:
            db_obj = await self.get(id)

            if db_obj is None:
                raise EntityNotFound(f"{self.model.__name__} with id {id} not found")

            for key, value in update_data.items():
                if hasattr(db_obj, key):
                    setattr(db_obj, key, value)

            self.session.add(db_obj)
            await self.session.flush()

            return db_obj

        except EntityNotFound:
            raise
        except Exception as e:
            logger.error(f"Error updating {self.model.__name__} with id {id}: {e}")
            raise RepositoryError(f"Failed to update entity: {e}") from e

    async def delete(self, id: Any) -> bool:
        try:
            stmt = select(self.model).where(self.model.id == id)
            result = await self.session.execute(stmt)
            db_obj = result.scalar_one_or_none()

            if not db_obj:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")
                return False

            await self.session.delete(db_obj)
            await self.session.flush()
            return True

        except Exception as e:
            logger.error(f"Error deleting {self.model.__name__} with id {id}: {e}")
            raise RepositoryError(f"Failed to delete entity: {e}") from e
