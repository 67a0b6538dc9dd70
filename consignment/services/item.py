"""Item service — consigned inventory CRUD and inventory reports."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.db_helpers import to_db_date, to_db_numeric_optional
from consignment.core.exceptions import ConflictError, NotFoundError, ValidationError
from consignment.core.filters import CommonFilters, item_filters
from consignment.domain.expense import ItemExpense
from consignment.domain.item import ITEM_STATUSES, Item
from consignment.domain.payment import ClientPayment, VendorPayout
from consignment.repositories.expense import ExpenseRepository
from consignment.repositories.item import ItemRepository
from consignment.repositories.payment import PaymentRepository, PayoutRepository
from consignment.repositories.vendor import VendorRepository
from consignment.schemas.item import ItemCreate, ItemProfitOut, ItemUpdate, ItemWithVendorOut

logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("min_cost", "max_cost", "min_sales_price", "max_sales_price")

def _normalize(values: dict) -> dict:
    """Coerce money and date fields present in *values* to column types."""
    for field in _MONEY_FIELDS:
        if field in values:
            values[field] = to_db_numeric_optional(values[field])
    if "acquisition_date" in values:
        values["acquisition_date"] = to_db_date(values["acquisition_date"])
    if values.get("status") and values["status"] not in ITEM_STATUSES:
        raise ValidationError(f"Invalid item status: {values['status']!r}")
    return values

class ItemService:
    def __init__(self, session: AsyncSession):
        self._repo = ItemRepository(session)
        self._vendors = VendorRepository(session)
        self._payments = PaymentRepository(session)
        self._payouts = PayoutRepository(session)
        self._expenses = ExpenseRepository(session)

    async def _require_vendor(self, vendor_id: str) -> None:
        if not await self._vendors.get_by_id(vendor_id):
            raise NotFoundError("Vendor", vendor_id)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def list_items(
        self, vendor_id: str | None = None, filters: CommonFilters | None = None
    ) -> list[ItemWithVendorOut]:
        conditions = item_filters(filters)
        if vendor_id:
            conditions.append(Item.vendor_id == vendor_id)
        rows = await self._repo.list_with_relations(*conditions)
        return [ItemWithVendorOut.from_row(*row) for row in rows]

    async def get_item(self, item_id: str) -> ItemWithVendorOut:
        row = await self._repo.get_with_relations(item_id)
        if not row:
            raise NotFoundError("Item", item_id)
        return ItemWithVendorOut.from_row(*row)

    async def create_item(self, data: ItemCreate) -> Item:
        await self._require_vendor(data.vendor_id)

        values = _normalize(data.model_dump())
        values["status"] = values.get("status") or "in-store"
        item = await self._repo.create(**values)
        logger.info("Created item %s for vendor %s", item.id, item.vendor_id)
        return item

    async def update_item(self, item_id: str, data: ItemUpdate) -> Item:
        if not await self._repo.get_by_id(item_id):
            raise NotFoundError("Item", item_id)

        changes = data.changes()
        if "vendor_id" in changes:
            if changes["vendor_id"] is None:
                changes.pop("vendor_id")
            else:
                await self._require_vendor(changes["vendor_id"])
        if changes.get("status") is None:
            changes.pop("status", None)

        updated = await self._repo.update(item_id, **_normalize(changes))
        return updated  # type: ignore[return-value]

    async def delete_item(self, item_id: str) -> None:
        if not await self._repo.get_by_id(item_id):
            raise NotFoundError("Item", item_id)

        guards = (
            (self._payments, ClientPayment.item_id, "payment records"),
            (self._payouts, VendorPayout.item_id, "payout records"),
            (self._expenses, ItemExpense.item_id, "expense records"),
        )
        for repo, column, label in guards:
            count = await repo.count_where(column == item_id)
            if count > 0:
                logger.warning("Refused to delete item %s: %d %s", item_id, count, label)
                raise ConflictError(f"Cannot delete item: has {count} {label}")

        await self._repo.delete(item_id)
        logger.info("Deleted item %s", item_id)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def get_recent_items(self, limit: int = 10) -> list[ItemWithVendorOut]:
        rows = await self._repo.list_with_vendor(limit=limit)
        return [ItemWithVendorOut.from_row(item, vendor) for item, vendor in rows]

    async def get_top_performing_items(self, limit: int = 10) -> list[ItemProfitOut]:
        rows = await self._repo.top_by_profit(limit)
        return [
            ItemProfitOut(
                **ItemWithVendorOut.from_row(item, vendor).model_dump(),
                profit=to_db_numeric_optional(profit),
            )
            for item, vendor, profit in rows
        ]

    async def get_pending_payouts(self) -> list[ItemWithVendorOut]:
        """Sold items the vendor has not yet been fully paid for."""
        rows = await self._repo.sold_with_outstanding_payout()
        return [ItemWithVendorOut.from_row(item, vendor) for item, vendor in rows]
