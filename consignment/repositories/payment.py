"""ClientPayment, VendorPayout and InstallmentPlan repositories."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ColumnElement, func, select

from consignment.core.joins import (
    installment_with_relations,
    item_with_vendor,
    payment_with_relations,
    payout_with_relations,
)
from consignment.domain.item import Item
from consignment.domain.payment import ClientPayment, InstallmentPlan, VendorPayout
from consignment.domain.vendor import Client, Vendor
from consignment.repositories.base import BaseRepository


class PaymentRepository(BaseRepository[ClientPayment]):
    model = ClientPayment
    default_order = "paid_at"

    async def list_with_relations(
        self, *conditions: ColumnElement[bool], limit: int | None = None
    ) -> list[tuple[ClientPayment, Item, Vendor, Client]]:
        q = payment_with_relations().order_by(ClientPayment.paid_at.desc())
        if conditions:
            q = q.where(*conditions)
        if limit is not None:
            q = q.limit(limit)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def sum_amount(self, *conditions: ColumnElement[bool]) -> Decimal:
        q = select(func.coalesce(func.sum(ClientPayment.amount), 0))
        if conditions:
            q = q.where(*conditions)
        return Decimal(str((await self._session.execute(q)).scalar_one()))

    async def totals(self) -> tuple[int, Decimal, Decimal]:
        """(count, sum, average) over every payment; zeros when there are none."""
        q = select(
            func.count(ClientPayment.id),
            func.coalesce(func.sum(ClientPayment.amount), 0),
            func.coalesce(func.avg(ClientPayment.amount), 0),
        )
        count, total, average = (await self._session.execute(q)).one()
        return int(count), Decimal(str(total)), Decimal(str(average))

    async def totals_by_method(self, *conditions: ColumnElement[bool]) -> list:
        """Rows of (payment_method, total_amount, transaction_count, avg_amount), largest total first."""
        total = func.coalesce(func.sum(ClientPayment.amount), 0)
        q = (
            select(
                ClientPayment.payment_method,
                total.label("total_amount"),
                func.count().label("transaction_count"),
                func.avg(ClientPayment.amount).label("avg_amount"),
            )
            .group_by(ClientPayment.payment_method)
            .order_by(total.desc())
        )
        if conditions:
            q = q.where(*conditions)
        return list((await self._session.execute(q)).all())


class PayoutRepository(BaseRepository[VendorPayout]):
    model = VendorPayout
    default_order = "paid_at"

    async def list_with_relations(
        self, *conditions: ColumnElement[bool], limit: int | None = None
    ) -> list[tuple[VendorPayout, Item, Vendor]]:
        q = payout_with_relations().order_by(VendorPayout.paid_at.desc())
        if conditions:
            q = q.where(*conditions)
        if limit is not None:
            q = q.limit(limit)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def sum_amount(self, *conditions: ColumnElement[bool]) -> Decimal:
        q = select(func.coalesce(func.sum(VendorPayout.amount), 0))
        if conditions:
            q = q.where(*conditions)
        return Decimal(str((await self._session.execute(q)).scalar_one()))

    async def totals(self) -> tuple[int, Decimal, Decimal]:
        """(count, sum, average) over every payout; zeros when there are none."""
        q = select(
            func.count(VendorPayout.id),
            func.coalesce(func.sum(VendorPayout.amount), 0),
            func.coalesce(func.avg(VendorPayout.amount), 0),
        )
        count, total, average = (await self._session.execute(q)).one()
        return int(count), Decimal(str(total)), Decimal(str(average))

    async def sold_item_summaries(self) -> list:
        """One row per sold item: (Item, Vendor, sale_price, total_paid, first_payout_date, last_payout_date).

        ``sale_price`` is what clients have paid for the item so far and
        ``total_paid`` what the vendor has received for it.
        """
        sale_price = (
            select(func.coalesce(func.sum(ClientPayment.amount), 0))
            .where(ClientPayment.item_id == Item.id)
            .correlate(Item)
            .scalar_subquery()
        )
        q = (
            item_with_vendor()
            .add_columns(
                sale_price.label("sale_price"),
                func.coalesce(func.sum(VendorPayout.amount), 0).label("total_paid"),
                func.min(VendorPayout.paid_at).label("first_payout_date"),
                func.max(VendorPayout.paid_at).label("last_payout_date"),
            )
            .outerjoin(VendorPayout, VendorPayout.item_id == Item.id)
            .where(Item.status == "sold")
            .group_by(Item.id, Vendor.id)
            .order_by(Item.created_at.desc())
        )
        return list((await self._session.execute(q)).all())


class InstallmentRepository(BaseRepository[InstallmentPlan]):
    model = InstallmentPlan
    default_order = "due_date"

    async def list_with_relations(
        self,
        *conditions: ColumnElement[bool],
        order: str = "desc",
        limit: int | None = None,
    ) -> list[tuple[InstallmentPlan, Item, Vendor, Client]]:
        due = InstallmentPlan.due_date
        q = installment_with_relations().order_by(due.desc() if order == "desc" else due.asc())
        if conditions:
            q = q.where(*conditions)
        if limit is not None:
            q = q.limit(limit)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def get_with_relations(
        self, installment_id: str
    ) -> tuple[InstallmentPlan, Item, Vendor, Client] | None:
        rows = await self.list_with_relations(InstallmentPlan.id == installment_id)
        return rows[0] if rows else None

    async def count_pending(self, *conditions: ColumnElement[bool]) -> int:
        return await self.count_where(InstallmentPlan.status == "pending", *conditions)
