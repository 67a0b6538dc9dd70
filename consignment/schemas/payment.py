"""ClientPayment, VendorPayout and InstallmentPlan Pydantic schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from consignment.schemas.common import CamelModel
from consignment.schemas.item import ItemOut
from consignment.schemas.vendor import ClientOut, VendorOut


class PaymentCreate(CamelModel):
    item_id: str
    client_id: str
    payment_method: str
    amount: Decimal | float | str
    paid_at: date | datetime | str | None = None


class PaymentUpdate(CamelModel):
    payment_method: str | None = None
    amount: Decimal | float | str | None = None
    paid_at: date | datetime | str | None = None


class PaymentOut(CamelModel):
    id: str
    item_id: str
    client_id: str
    payment_method: str
    amount: Decimal
    paid_at: datetime


class PaymentWithRelationsOut(PaymentOut):
    item: ItemOut
    vendor: VendorOut
    client: ClientOut

    @classmethod
    def from_row(cls, payment, item, vendor, client) -> "PaymentWithRelationsOut":
        return cls(
            **PaymentOut.model_validate(payment).model_dump(),
            item=ItemOut.model_validate(item),
            vendor=VendorOut.model_validate(vendor),
            client=ClientOut.model_validate(client),
        )


class PayoutCreate(CamelModel):
    item_id: str
    vendor_id: str
    amount: Decimal | float | str
    paid_at: date | datetime | str | None = None
    bank_account: str | None = None
    transfer_id: str | None = None
    notes: str | None = None


class PayoutOut(CamelModel):
    id: str
    item_id: str
    vendor_id: str
    amount: Decimal
    paid_at: datetime
    bank_account: str | None = None
    transfer_id: str | None = None
    notes: str | None = None


class PayoutWithRelationsOut(PayoutOut):
    item: ItemOut
    vendor: VendorOut

    @classmethod
    def from_row(cls, payout, item, vendor) -> "PayoutWithRelationsOut":
        return cls(
            **PayoutOut.model_validate(payout).model_dump(),
            item=ItemOut.model_validate(item),
            vendor=VendorOut.model_validate(vendor),
        )


class InstallmentCreate(CamelModel):
    item_id: str
    client_id: str
    amount: Decimal | float | str
    due_date: date | datetime | str


class InstallmentOut(CamelModel):
    id: str
    item_id: str
    client_id: str
    amount: Decimal
    due_date: date
    paid_amount: Decimal
    status: str
    created_at: datetime


class InstallmentWithRelationsOut(InstallmentOut):
    item: ItemOut
    vendor: VendorOut
    client: ClientOut

    @classmethod
    def from_row(cls, plan, item, vendor, client) -> "InstallmentWithRelationsOut":
        return cls(
            **InstallmentOut.model_validate(plan).model_dump(),
            item=ItemOut.model_validate(item),
            vendor=VendorOut.model_validate(vendor),
            client=ClientOut.model_validate(client),
        )


class InstallmentUpdate(CamelModel):
    amount: Decimal | float | str | None = None
    due_date: date | datetime | str | None = None


class InstallmentPaymentIn(CamelModel):
    paid_amount: Decimal | float | str


class UpcomingPayoutOut(CamelModel):
    """A sold item with the vendor's share of the sale and how much of it is paid."""

    item: ItemOut
    vendor: VendorOut
    sale_price: Decimal
    vendor_payout_amount: Decimal
    total_paid: Decimal
    remaining_balance: Decimal
    payment_progress: float
    is_fully_paid: bool
    first_payout_date: datetime | None = None
    last_payout_date: datetime | None = None
