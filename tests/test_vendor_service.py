import pytest

from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.repositories.vendor import VendorRepository
from consignment.schemas.vendor import VendorCreate, VendorUpdate
from consignment.services.vendor import VendorService


async def test_create_and_get_vendor(session):
    service = VendorService(session)
    created = await service.create_vendor(
        VendorCreate(name="Lucía Díaz", email="lucia@example.com", accountType="Corriente")
    )
    fetched = await service.get_vendor(created.id)
    assert fetched.name == "Lucía Díaz"
    assert fetched.account_type == "Corriente"


async def test_get_missing_vendor_raises_not_found(session):
    with pytest.raises(NotFoundError) as info:
        await VendorService(session).get_vendor("missing")
    assert info.value.entity == "Vendor"
    assert info.value.entity_id == "missing"


async def test_partial_update_only_touches_sent_fields(session, add_vendor):
    vendor = await add_vendor(name="Ana", phone="+56 9 1111 1111", email="ana@example.com")

    updated = await VendorService(session).update_vendor(vendor.id, VendorUpdate(phone="+56 9 2222 2222"))

    assert updated.phone == "+56 9 2222 2222"
    assert updated.name == "Ana"
    assert updated.email == "ana@example.com"


async def test_update_with_nothing_returns_vendor_unchanged(session, add_vendor):
    vendor = await add_vendor(name="Ana")
    updated = await VendorService(session).update_vendor(vendor.id, VendorUpdate())
    assert updated.name == "Ana"


async def test_update_missing_vendor(session):
    with pytest.raises(NotFoundError):
        await VendorService(session).update_vendor("missing", VendorUpdate(name="x"))


async def test_delete_unreferenced_vendor(session, add_vendor):
    vendor = await add_vendor()
    await VendorService(session).delete_vendor(vendor.id)
    assert await VendorRepository(session).get_by_id(vendor.id) is None


async def test_delete_vendor_with_items_conflicts(session, add_vendor, add_item):
    vendor = await add_vendor()
    await add_item(vendor)
    await add_item(vendor, serial_no="Z999")

    with pytest.raises(ConflictError, match="has 2 items"):
        await VendorService(session).delete_vendor(vendor.id)
    assert await VendorRepository(session).get_by_id(vendor.id) is not None


async def test_delete_vendor_with_payouts_conflicts(session, add_vendor, add_item, add_payout):
    vendor = await add_vendor()
    other = await add_vendor(name="Other")
    item = await add_item(other)
    await add_payout(item, vendor)

    with pytest.raises(ConflictError, match="payout records"):
        await VendorService(session).delete_vendor(vendor.id)


async def test_delete_vendor_with_contract_conflicts(session, add_vendor, add_contract):
    vendor = await add_vendor()
    await add_contract(vendor)

    with pytest.raises(ConflictError, match="contracts"):
        await VendorService(session).delete_vendor(vendor.id)


async def test_delete_missing_vendor(session):
    with pytest.raises(NotFoundError):
        await VendorService(session).delete_vendor("missing")
