"""Contract service.

Creating a contract is the one multi-step write in the system: the vendor,
the optional template and every referenced item are checked, the items are
copied into immutable snapshots, and the contract row is inserted, all in
one transaction.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.config import settings
from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.db.base import atomic
from consignment.domain.contract import LOCKED_CONTRACT_STATUSES, Contract
from consignment.domain.item import Item
from consignment.repositories.contract import ContractRepository, ContractTemplateRepository
from consignment.repositories.item import ItemRepository
from consignment.repositories.vendor import VendorRepository
from consignment.schemas.contract import (
    ContractCreate,
    ContractItemSnapshot,
    ContractUpdate,
    ContractWithRelationsOut,
    snapshot_amount,
)

logger = logging.getLogger(__name__)


def snapshot_item(item: Item) -> ContractItemSnapshot:
    """Freeze the fields of *item* a contract needs to keep."""
    return ContractItemSnapshot(
        item_id=item.id,
        title=item.title or "",
        brand=item.brand or "",
        model=item.model or "",
        serial_no=item.serial_no or "",
        condition=item.condition or "",
        image_url=item.image_url or "",
        min_cost=snapshot_amount(item.min_cost),
        max_cost=snapshot_amount(item.max_cost),
        min_sales_price=snapshot_amount(item.min_sales_price),
        max_sales_price=snapshot_amount(item.max_sales_price),
    )


class ContractService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._repo = ContractRepository(session)
        self._templates = ContractTemplateRepository(session)
        self._vendors = VendorRepository(session)
        self._items = ItemRepository(session)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_contracts(self) -> list[ContractWithRelationsOut]:
        rows = await self._repo.list_with_relations()
        return [ContractWithRelationsOut.from_row(*row) for row in rows]

    async def list_contracts_by_vendor(self, vendor_id: str) -> list[ContractWithRelationsOut]:
        rows = await self._repo.list_with_relations(Contract.vendor_id == vendor_id)
        return [ContractWithRelationsOut.from_row(*row) for row in rows]

    async def get_contract(self, contract_id: str) -> ContractWithRelationsOut:
        row = await self._repo.get_with_relations(contract_id)
        if not row:
            raise NotFoundError("Contract", contract_id)
        return ContractWithRelationsOut.from_row(*row)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def _snapshots_for(self, item_ids: list[str]) -> list[ContractItemSnapshot]:
        items = {item.id: item for item in await self._items.get_many(item_ids)}
        missing = [item_id for item_id in item_ids if item_id not in items]
        if missing:
            raise NotFoundError("Item", missing[0])
        # One snapshot per requested id, in request order
        return [snapshot_item(items[item_id]) for item_id in item_ids]

    async def create_contract(self, data: ContractCreate) -> Contract:
        async with atomic(self._session):
            if not await self._vendors.get_by_id(data.vendor_id):
                raise NotFoundError("Vendor", data.vendor_id)

            template = None
            if data.template_id:
                template = await self._templates.get_by_id(data.template_id)
                if not template:
                    raise NotFoundError("Contract Template", data.template_id)

            if data.item_ids:
                snapshots = await self._snapshots_for(data.item_ids)
            else:
                snapshots = list(data.item_snapshots or [])

            terms_text = data.terms_text or (template.terms_text if template else None)
            contract = await self._repo.create(
                vendor_id=data.vendor_id,
                template_id=data.template_id,
                status=data.status or "draft",
                terms_text=terms_text or settings.default_terms_text,
                item_snapshots=[snapshot.model_dump() for snapshot in snapshots],
            )

        logger.info(
            "Created contract %s for vendor %s with %d item snapshot(s)",
            contract.id, contract.vendor_id, len(snapshots),
        )
        return contract

    async def update_contract(self, contract_id: str, data: ContractUpdate) -> Contract:
        if not await self._repo.get_by_id(contract_id):
            raise NotFoundError("Contract", contract_id)

        changes = data.changes()
        for field in ("vendor_id", "status", "terms_text", "item_snapshots"):
            if field in changes and changes[field] is None:
                changes.pop(field)
        if changes.get("vendor_id") and not await self._vendors.get_by_id(changes["vendor_id"]):
            raise NotFoundError("Vendor", changes["vendor_id"])
        if changes.get("template_id") and not await self._templates.get_by_id(changes["template_id"]):
            raise NotFoundError("Contract Template", changes["template_id"])

        updated = await self._repo.update(contract_id, **changes)
        return updated  # type: ignore[return-value]

    async def delete_contract(self, contract_id: str) -> None:
        contract = await self._repo.get_by_id(contract_id)
        if not contract:
            raise NotFoundError("Contract", contract_id)
        if contract.status in LOCKED_CONTRACT_STATUSES:
            logger.warning("Refused to delete %s contract %s", contract.status, contract_id)
            raise ConflictError(f"Cannot delete a contract with status '{contract.status}'")

        await self._repo.delete(contract_id)
        logger.info("Deleted contract %s", contract_id)
