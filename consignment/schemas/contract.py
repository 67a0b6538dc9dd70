"""Contract and ContractTemplate Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from consignment.schemas.common import CamelModel
from consignment.schemas.vendor import VendorOut

ContractStatus = Literal["draft", "active", "final"]


class ContractItemSnapshot(CamelModel):
    """Frozen copy of an item's identity, pricing and condition.

    Optional text fields are stored as ``""`` and missing amounts as ``"0"``
    so every snapshot has the same shape.
    """

    model_config = {**CamelModel.model_config, "frozen": True}

    item_id: str
    title: str = ""
    brand: str = ""
    model: str = ""
    serial_no: str = ""
    condition: str = ""
    image_url: str = ""
    min_cost: str = "0"
    max_cost: str = "0"
    min_sales_price: str = "0"
    max_sales_price: str = "0"


class ContractCreate(CamelModel):
    vendor_id: str
    template_id: str | None = None
    status: ContractStatus | None = None
    terms_text: str | None = None
    item_ids: list[str] | None = None
    item_snapshots: list[ContractItemSnapshot] | None = None


class ContractUpdate(CamelModel):
    vendor_id: str | None = None
    template_id: str | None = None
    status: ContractStatus | None = None
    terms_text: str | None = None
    item_snapshots: list[ContractItemSnapshot] | None = None
    pdf_url: str | None = None


class ContractTemplateCreate(CamelModel):
    name: str
    terms_text: str
    is_default: bool = False


class ContractTemplateUpdate(CamelModel):
    name: str | None = None
    terms_text: str | None = None
    is_default: bool | None = None


class ContractTemplateOut(CamelModel):
    id: str
    name: str
    terms_text: str
    is_default: bool
    created_at: datetime


class ContractOut(CamelModel):
    id: str
    vendor_id: str
    template_id: str | None = None
    status: str
    terms_text: str
    item_snapshots: list[ContractItemSnapshot]
    pdf_url: str | None = None
    created_at: datetime


class ContractWithRelationsOut(ContractOut):
    vendor: VendorOut
    template: ContractTemplateOut | None = None

    @classmethod
    def from_row(cls, contract, vendor, template) -> "ContractWithRelationsOut":
        return cls(
            **ContractOut.model_validate(contract).model_dump(),
            vendor=VendorOut.model_validate(vendor),
            template=ContractTemplateOut.model_validate(template) if template else None,
        )


def snapshot_amount(value: Decimal | None) -> str:
    return "0" if value is None else str(value)
