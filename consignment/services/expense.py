"""Expense service — costs booked against an item, or general business costs (no item)."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.db_helpers import to_db_numeric, to_db_timestamp
from consignment.core.exceptions import NotFoundError, ValidationError
from consignment.domain.expense import ItemExpense
from consignment.repositories.expense import ExpenseRepository
from consignment.repositories.item import ItemRepository
from consignment.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseWithItemOut

logger = logging.getLogger(__name__)

class ExpenseService:
    def __init__(self, session: AsyncSession):
        self._repo = ExpenseRepository(session)
        self._items = ItemRepository(session)

    async def _require_item(self, item_id: str | None) -> None:
        if item_id and not await self._items.get_by_id(item_id):
            raise NotFoundError("Item", item_id)

    async def list_expenses(self) -> list[ExpenseWithItemOut]:
        rows = await self._repo.list_with_item()
        return [ExpenseWithItemOut.from_row(expense, item) for expense, item in rows]

    async def list_expenses_by_item(self, item_id: str) -> list[ItemExpense]:
        return await self._repo.list(ItemExpense.item_id == item_id)

    async def list_general_expenses(self) -> list[ItemExpense]:
        return await self._repo.list(ItemExpense.item_id.is_(None))

    async def get_expense(self, expense_id: str) -> ItemExpense:
        expense = await self._repo.get_by_id(expense_id)
        if not expense:
            raise NotFoundError("Expense", expense_id)
        return expense

    async def create_expense(self, data: ExpenseCreate) -> ItemExpense:
        await self._require_item(data.item_id)
        expense = await self._repo.create(
            item_id=data.item_id,
            expense_type=data.expense_type,
            amount=to_db_numeric(data.amount),
            incurred_at=to_db_timestamp(data.incurred_at),
            notes=data.notes or "",
        )
        logger.info("Created %s expense %s (item=%s)", expense.expense_type, expense.id, expense.item_id)
        return expense

    async def update_expense(self, expense_id: str, data: ExpenseUpdate) -> ItemExpense:
        _ = await self.get_expense(expense_id)

        changes = data.changes()
        for field in ("expense_type", "amount", "incurred_at"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be cleared")
        if changes.get("item_id"):
            await self._require_item(changes["item_id"])
        if "amount" in changes:
            changes["amount"] = to_db_numeric(changes["amount"])
        if "incurred_at" in changes:
            changes["incurred_at"] = to_db_timestamp(changes["incurred_at"])

        updated = await self._repo.update(expense_id, **changes)
        return updated  # type: ignore[return-value]

    async def delete_expense(self, expense_id: str) -> ItemExpense:
        """Delete and return the removed expense."""
        expense = await self.get_expense(expense_id)
        await self._repo.delete(expense_id)
        logger.info("Deleted expense %s", expense_id)
        return expense
