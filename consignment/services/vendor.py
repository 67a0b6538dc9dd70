"""Vendor service — CRUD plus the referential guards that protect vendor deletes.

Rule: No FastAPI here. Queries go through repositories.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.domain.contract import Contract
from consignment.domain.item import Item
from consignment.domain.payment import VendorPayout
from consignment.domain.vendor import Vendor
from consignment.repositories.contract import ContractRepository
from consignment.repositories.item import ItemRepository
from consignment.repositories.payment import PayoutRepository
from consignment.repositories.vendor import VendorRepository
from consignment.schemas.vendor import VendorCreate, VendorUpdate

logger = logging.getLogger(__name__)

class VendorService:
    def __init__(self, session: AsyncSession):
        self._repo = VendorRepository(session)
        self._items = ItemRepository(session)
        self._payouts = PayoutRepository(session)
        self._contracts = ContractRepository(session)

    async def list_vendors(self) -> list[Vendor]:
        return await self._repo.list()

    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def create_vendor(self, data: VendorCreate) -> Vendor:
        vendor = await self._repo.create(**data.model_dump())
        logger.info("Created vendor %s", vendor.id)
        return vendor

    async def update_vendor(self, vendor_id: str, data: VendorUpdate) -> Vendor:
        _ = await self.get_vendor(vendor_id)  # raises 404 if missing
        updated = await self._repo.update(vendor_id, **data.changes())
        return updated  # type: ignore[return-value]

    async def delete_vendor(self, vendor_id: str) -> None:
        _ = await self.get_vendor(vendor_id)

        guards = (
            (self._items, Item.vendor_id, "items"),
            (self._payouts, VendorPayout.vendor_id, "payout records"),
            (self._contracts, Contract.vendor_id, "contracts"),
        )
        for repo, column, label in guards:
            count = await repo.count_where(column == vendor_id)
            if count > 0:
                logger.warning("Refused to delete vendor %s: %d %s", vendor_id, count, label)
                raise ConflictError(f"Cannot delete vendor: has {count} {label}")

        await self._repo.delete(vendor_id)
        logger.info("Deleted vendor %s", vendor_id)
