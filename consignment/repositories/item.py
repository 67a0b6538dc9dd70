"""Item repository — item rows joined with their vendor and lookups, plus sales/payout aggregates."""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, func

from consignment.core.joins import item_with_relations, item_with_vendor
from consignment.domain.item import Brand, Category, Item
from consignment.domain.payment import ClientPayment, VendorPayout
from consignment.domain.vendor import Vendor
from consignment.repositories.base import BaseRepository


class ItemRepository(BaseRepository[Item]):
    model = Item

    async def list_with_vendor(
        self, *conditions: ColumnElement[bool], limit: int | None = None
    ) -> list[tuple[Item, Vendor]]:
        q = item_with_vendor().order_by(Item.created_at.desc())
        if conditions:
            q = q.where(*conditions)
        if limit is not None:
            q = q.limit(limit)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def list_with_relations(
        self, *conditions: ColumnElement[bool]
    ) -> list[tuple[Item, Vendor, Brand | None, Category | None]]:
        q = item_with_relations().order_by(Item.created_at.desc())
        if conditions:
            q = q.where(*conditions)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def get_with_relations(
        self, item_id: str
    ) -> tuple[Item, Vendor, Brand | None, Category | None] | None:
        rows = await self.list_with_relations(Item.id == item_id)
        return rows[0] if rows else None

    async def get_many(self, item_ids: list[str]) -> list[Item]:
        if not item_ids:
            return []
        return await self.list(Item.id.in_(item_ids))

    async def top_by_profit(self, limit: int) -> list[tuple[Item, Vendor, Any]]:
        """Sold items ranked by collected revenue minus minimum cost."""
        revenue = func.coalesce(func.sum(ClientPayment.amount), 0)
        profit = (revenue - func.coalesce(Item.min_cost, 0)).label("profit")
        q = (
            item_with_vendor()
            .add_columns(profit)
            .outerjoin(ClientPayment, ClientPayment.item_id == Item.id)
            .where(Item.status == "sold")
            .group_by(Item.id, Vendor.id)
            .order_by(profit.desc())
            .limit(limit)
        )
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def sold_with_outstanding_payout(self) -> list[tuple[Item, Vendor]]:
        """Sold items whose vendor payouts still total less than the item's minimum cost."""
        paid = func.coalesce(func.sum(VendorPayout.amount), 0)
        q = (
            item_with_vendor()
            .outerjoin(VendorPayout, VendorPayout.item_id == Item.id)
            .where(Item.status == "sold")
            .group_by(Item.id, Vendor.id)
            .having(paid < func.coalesce(Item.min_cost, 0))
            .order_by(Item.created_at.desc())
        )
        return [tuple(row) for row in (await self._session.execute(q)).all()]
