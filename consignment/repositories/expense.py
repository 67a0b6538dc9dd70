"""ItemExpense repository."""

from __future__ import annotations

from consignment.core.joins import expense_with_item
from consignment.domain.expense import ItemExpense
from consignment.domain.item import Item
from consignment.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository[ItemExpense]):
    model = ItemExpense
    default_order = "incurred_at"

    async def list_with_item(self) -> list[tuple[ItemExpense, Item | None]]:
        q = expense_with_item().order_by(ItemExpense.incurred_at.desc())
        return [tuple(row) for row in (await self._session.execute(q)).all()]
