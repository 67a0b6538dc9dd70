import pytest
from pydantic import ValidationError as SchemaValidationError

from consignment.core.config import settings
from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.repositories.contract import ContractRepository
from consignment.schemas.contract import ContractCreate, ContractItemSnapshot, ContractUpdate
from consignment.schemas.item import ItemUpdate
from consignment.services.contract import ContractService, snapshot_item
from consignment.services.item import ItemService


async def test_create_contract_snapshots_every_item_in_order(session, add_vendor, add_item):
    vendor = await add_vendor()
    first = await add_item(vendor, title="Rolex Daytona")
    second = await add_item(vendor, title="Cartier Tank", image_url=None, max_cost=None)

    contract = await ContractService(session).create_contract(
        ContractCreate(vendor_id=vendor.id, item_ids=[second.id, first.id])
    )

    snapshots = contract.item_snapshots
    assert len(snapshots) == 2
    assert [s["item_id"] for s in snapshots] == [second.id, first.id]
    assert snapshots[0]["title"] == "Cartier Tank"
    assert snapshots[0]["image_url"] == ""
    assert snapshots[0]["max_cost"] == "0"
    assert snapshots[1]["min_sales_price"] == "8000.00"
    assert contract.status == "draft"


async def test_terms_fall_back_to_template_then_settings(session, add_vendor, add_template):
    vendor = await add_vendor()
    template = await add_template(terms_text="Template terms")
    service = ContractService(session)

    from_template = await service.create_contract(
        ContractCreate(vendor_id=vendor.id, template_id=template.id)
    )
    assert from_template.terms_text == "Template terms"
    assert from_template.template_id == template.id

    stock = await service.create_contract(ContractCreate(vendor_id=vendor.id))
    assert stock.terms_text == settings.default_terms_text

    explicit = await service.create_contract(
        ContractCreate(vendor_id=vendor.id, template_id=template.id, terms_text="Custom")
    )
    assert explicit.terms_text == "Custom"


async def test_explicit_snapshots_are_stored_when_no_item_ids(session, add_vendor):
    vendor = await add_vendor()
    contract = await ContractService(session).create_contract(
        ContractCreate(
            vendor_id=vendor.id,
            item_snapshots=[ContractItemSnapshot(item_id="legacy-1", title="Old stock")],
        )
    )
    assert contract.item_snapshots[0]["item_id"] == "legacy-1"
    assert contract.item_snapshots[0]["min_cost"] == "0"


async def test_unknown_vendor_creates_nothing(session):
    with pytest.raises(NotFoundError, match="Vendor"):
        await ContractService(session).create_contract(ContractCreate(vendor_id="missing"))
    assert await ContractRepository(session).count_where() == 0


async def test_unknown_template_creates_nothing(session, add_vendor):
    vendor = await add_vendor()
    with pytest.raises(NotFoundError, match="Contract Template"):
        await ContractService(session).create_contract(
            ContractCreate(vendor_id=vendor.id, template_id="missing")
        )
    assert await ContractRepository(session).count_where() == 0


async def test_unknown_item_creates_nothing(session, add_vendor, add_item):
    vendor = await add_vendor()
    item = await add_item(vendor)
    with pytest.raises(NotFoundError, match="Item with id ghost"):
        await ContractService(session).create_contract(
            ContractCreate(vendor_id=vendor.id, item_ids=[item.id, "ghost"])
        )
    assert await ContractRepository(session).count_where() == 0


async def test_snapshot_survives_later_item_edits(session, add_vendor, add_item):
    vendor = await add_vendor()
    item = await add_item(vendor, title="Rolex Submariner", condition="excellent")
    contracts = ContractService(session)
    contract = await contracts.create_contract(ContractCreate(vendor_id=vendor.id, item_ids=[item.id]))

    await ItemService(session).update_item(
        item.id, ItemUpdate(title="Renamed", condition="worn", min_sales_price="1.00")
    )

    stored = await contracts.get_contract(contract.id)
    snapshot = stored.item_snapshots[0]
    assert snapshot.title == "Rolex Submariner"
    assert snapshot.condition == "excellent"
    assert snapshot.min_sales_price == "8000.00"


def test_snapshot_is_frozen():
    snapshot = ContractItemSnapshot(item_id="i1", title="A")
    with pytest.raises(SchemaValidationError):
        snapshot.title = "B"


async def test_snapshot_item_blanks_missing_fields(session, add_vendor, add_item):
    item = await add_item(await add_vendor(), model=None, min_cost=None)
    snapshot = snapshot_item(item)
    assert snapshot.model == ""
    assert snapshot.min_cost == "0"
    assert snapshot.brand == "Rolex"


async def test_get_contract_includes_vendor_and_template(session, add_vendor, add_template):
    vendor = await add_vendor(name="Ana")
    template = await add_template(name="Premium")
    contract = await ContractService(session).create_contract(
        ContractCreate(vendor_id=vendor.id, template_id=template.id)
    )

    result = await ContractService(session).get_contract(contract.id)
    assert result.vendor.name == "Ana"
    assert result.template.name == "Premium"


async def test_list_contracts_by_vendor(session, add_vendor, add_contract):
    ana = await add_vendor(name="Ana")
    ben = await add_vendor(name="Ben")
    await add_contract(ana)
    await add_contract(ana)
    await add_contract(ben)

    service = ContractService(session)
    assert len(await service.list_contracts()) == 3
    by_ana = await service.list_contracts_by_vendor(ana.id)
    assert len(by_ana) == 2
    assert all(c.vendor_id == ana.id for c in by_ana)
    assert all(c.template is None for c in by_ana)


async def test_get_missing_contract(session):
    with pytest.raises(NotFoundError):
        await ContractService(session).get_contract("missing")


async def test_update_contract_status_only(session, add_vendor, add_contract):
    contract = await add_contract(await add_vendor())
    updated = await ContractService(session).update_contract(contract.id, ContractUpdate(status="active"))
    assert updated.status == "active"
    assert updated.terms_text == "terms"


async def test_update_contract_to_unknown_vendor(session, add_vendor, add_contract):
    contract = await add_contract(await add_vendor())
    with pytest.raises(NotFoundError):
        await ContractService(session).update_contract(contract.id, ContractUpdate(vendor_id="missing"))


async def test_draft_contract_can_be_deleted(session, add_vendor, add_contract):
    contract = await add_contract(await add_vendor(), status="draft")
    await ContractService(session).delete_contract(contract.id)
    assert await ContractRepository(session).get_by_id(contract.id) is None


@pytest.mark.parametrize("status", ["active", "final"])
async def test_locked_contract_cannot_be_deleted(session, add_vendor, add_contract, status):
    contract = await add_contract(await add_vendor(), status=status)
    with pytest.raises(ConflictError, match=status):
        await ContractService(session).delete_contract(contract.id)
    assert await ContractRepository(session).get_by_id(contract.id) is not None


async def test_delete_missing_contract(session):
    with pytest.raises(NotFoundError):
        await ContractService(session).delete_contract("missing")
