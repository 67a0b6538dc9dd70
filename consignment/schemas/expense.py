"""ItemExpense Pydantic schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from consignment.schemas.common import CamelModel
from consignment.schemas.item import ItemOut


class ExpenseCreate(CamelModel):
    item_id: str | None = None
    expense_type: str
    amount: Decimal | float | str
    incurred_at: date | datetime | str
    notes: str | None = None


class ExpenseUpdate(CamelModel):
    item_id: str | None = None
    expense_type: str | None = None
    amount: Decimal | float | str | None = None
    incurred_at: date | datetime | str | None = None
    notes: str | None = None


class ExpenseOut(CamelModel):
    id: str
    item_id: str | None = None
    expense_type: str
    amount: Decimal
    incurred_at: datetime
    notes: str | None = None


class ExpenseWithItemOut(ExpenseOut):
    item: ItemOut | None = None

    @classmethod
    def from_row(cls, expense, item) -> "ExpenseWithItemOut":
        return cls(
            **ExpenseOut.model_validate(expense).model_dump(),
            item=ItemOut.model_validate(item) if item else None,
        )
