"""SQLAlchemy ORM models for consigned Items and their Brand / Category lookups."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from consignment.db.base import Base
from consignment.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

ITEM_STATUSES = ("in-store", "reserved", "sold", "returned")


class Brand(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "brand"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Category(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Item(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "item"

    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendor.id"), nullable=False, index=True
    )
    brand_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("brand.id"), nullable=True, index=True
    )
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("category.id"), nullable=True, index=True
    )

    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)  # free-text, predates brand_id
    model: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    serial_no: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    acquisition_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    min_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    max_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    min_sales_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    max_sales_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)

    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # "in-store" | "reserved" | "sold" | "returned"
    status: Mapped[str] = mapped_column(String(50), default="in-store", nullable=False, index=True)
