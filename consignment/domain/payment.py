"""SQLAlchemy ORM models for money movements: client payments, vendor payouts, installments,
and the payment-method lookup."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from consignment.db.base import Base
from consignment.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin


class ClientPayment(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "client_payment"

    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item.id"), nullable=False, index=True
    )
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("client.id"), nullable=False, index=True
    )
    payment_method: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class VendorPayout(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "vendor_payout"

    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item.id"), nullable=False, index=True
    )
    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendor.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    bank_account: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    transfer_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class InstallmentPlan(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """One scheduled partial payment of an item sale."""

    __tablename__ = "installment_plan"

    item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("item.id"), nullable=False, index=True
    )
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("client.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    # "pending" | "paid" | "overdue"
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)


class PaymentMethod(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Lookup of accepted payment methods; payments store the method by name."""

    __tablename__ = "payment_method"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
