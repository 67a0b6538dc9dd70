"""SQLAlchemy ORM models for Vendors and Clients (the two parties of a consignment sale)."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from consignment.db.base import Base
from consignment.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin


class Vendor(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Consignor: owns the items the store sells on its behalf."""

    __tablename__ = "vendor"

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    tax_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Payout destination
    bank_account_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    bank_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # "Ahorros" | "Corriente"
    account_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class Client(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Buyer of consigned items."""

    __tablename__ = "client"

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    billing_addr: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    id_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
