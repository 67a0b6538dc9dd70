"""SQLAlchemy ORM model for item-level and general business expenses."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from consignment.db.base import Base
from consignment.domain.mixins import UUIDPrimaryKeyMixin


class ItemExpense(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "item_expense"

    # NULL for general business expenses
    item_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("item.id"), nullable=True, index=True
    )
    expense_type: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    incurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
