"""Generic async repository: get / list / create / sparse update / hard delete / guard counts."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.filters import combine_conditions
from consignment.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Rows are hard-deleted; callers are expected to run guard counts
    (see :meth:`count_where`) before removing anything other rows point at.
    """

    model: type[ModelT]
    default_order: str = "created_at"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        return await self._session.get(self.model, entity_id, populate_existing=True)

    async def list(
        self,
        *conditions: ColumnElement[bool],
        order_by: str | None = None,
        order: str = "desc",
        limit: int | None = None,
    ) -> list[ModelT]:
        """Return rows matching all *conditions*, newest first by default."""
        q = select(self.model)
        where = combine_conditions(list(conditions))
        if where is not None:
            q = q.where(where)

        col = getattr(self.model, order_by or self.default_order, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        if limit is not None:
            q = q.limit(limit)

        return list((await self._session.execute(q)).scalars().all())

    async def count_where(self, *conditions: ColumnElement[bool]) -> int:
        q = select(func.count()).select_from(self.model).where(*conditions)
        return (await self._session.execute(q)).scalar_one()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id / server defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        """Overwrite only the given columns; everything else keeps its value."""
        kwargs.pop("id", None)
        if kwargs:
            await self._session.execute(
                update(self.model).where(self.model.id == entity_id).values(**kwargs)
            )
            await self._session.flush()
        return await self.get_by_id(entity_id)

    async def update_where(self, *conditions: ColumnElement[bool], **values: Any) -> int:
        result = await self._session.execute(
            update(self.model).where(*conditions).values(**values)
        )
        await self._session.flush()
        return result.rowcount

    async def delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0
