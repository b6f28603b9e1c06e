"""Generic repository over one model and one async session.

Repositories flush but never commit; the caller owns the transaction.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from release_sync.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Create, look up, change and delete rows of ``model_class``."""

    def __init__(self, session: AsyncSession, model_class: type[ModelType]):
        self.session = session
        self.model_class = model_class

    async def create(self, **values: Any) -> ModelType:
        """Insert a row and return it with server defaults loaded."""
        entity = self.model_class(**values)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def find_one(self, *criteria: ColumnElement[bool]) -> ModelType | None:
        """Return the single row matching all criteria, or None."""
        result = await self.session.execute(self._select(criteria))
        return result.scalar_one_or_none()

    async def find_all(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> list[ModelType]:
        """Return every row matching all criteria."""
        query = self._select(criteria)
        if order_by:
            query = query.order_by(*order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, entity: ModelType, **values: Any) -> ModelType:
        """Set column values on a row; unknown names are skipped."""
        for key, value in values.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    def _select(self, criteria: Sequence[ColumnElement[bool]]) -> Select[tuple[ModelType]]:
        query = select(self.model_class)
        if criteria:
            query = query.where(*criteria)
        return query