"""Item Pydantic schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from consignment.schemas.common import CamelModel
from consignment.schemas.vendor import VendorOut


class ItemCreate(CamelModel):
    vendor_id: str
    brand_id: str | None = None
    category_id: str | None = None
    title: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_no: str | None = None
    condition: str | None = None
    acquisition_date: date | datetime | str | None = None
    min_cost: Decimal | float | str | None = None
    max_cost: Decimal | float | str | None = None
    min_sales_price: Decimal | float | str | None = None
    max_sales_price: Decimal | float | str | None = None
    image_url: str | None = None
    status: str | None = None


class ItemUpdate(ItemCreate):
    vendor_id: str | None = None


class ItemOut(CamelModel):
    id: str
    vendor_id: str
    brand_id: str | None = None
    category_id: str | None = None
    title: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_no: str | None = None
    condition: str | None = None
    acquisition_date: date | None = None
    min_cost: Decimal | None = None
    max_cost: Decimal | None = None
    min_sales_price: Decimal | None = None
    max_sales_price: Decimal | None = None
    image_url: str | None = None
    status: str
    created_at: datetime


class ItemWithVendorOut(ItemOut):
    vendor: VendorOut
    # Names from the brand / category lookup tables, when the item is linked to them
    brand_name: str | None = None
    category_name: str | None = None

    @classmethod
    def from_row(cls, item, vendor, brand=None, category=None) -> "ItemWithVendorOut":
        return cls(
            **ItemOut.model_validate(item).model_dump(),
            vendor=VendorOut.model_validate(vendor),
            brand_name=brand.name if brand else None,
            category_name=category.name if category else None,
        )


class ItemProfitOut(ItemWithVendorOut):
    profit: Decimal
