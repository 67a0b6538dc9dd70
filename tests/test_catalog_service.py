import pytest

from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.schemas.catalog import LookupCreate, LookupUpdate
from consignment.services.catalog import BrandService, CategoryService, PaymentMethodService


async def test_brand_crud(session):
    service = BrandService(session)
    brand = await service.create(LookupCreate(name="  Rolex "))
    assert brand.name == "Rolex"
    assert brand.active is True

    updated = await service.update(brand.id, LookupUpdate(active=False, name=None))
    assert updated.name == "Rolex"
    assert updated.active is False
    assert [b.id for b in await service.list()] == [brand.id]

    await service.delete(brand.id)
    with pytest.raises(NotFoundError, match="Brand with id"):
        await service.get(brand.id)


async def test_duplicate_names_conflict_case_insensitively(session):
    service = CategoryService(session)
    watches = await service.create(LookupCreate(name="Watches"))
    bags = await service.create(LookupCreate(name="Bags"))

    with pytest.raises(ConflictError, match="already exists"):
        await service.create(LookupCreate(name="watches"))
    with pytest.raises(ConflictError, match="already exists"):
        await service.update(bags.id, LookupUpdate(name="WATCHES"))

    # Renaming to its own name is not a clash
    same = await service.update(watches.id, LookupUpdate(name="Watches"))
    assert same.id == watches.id


async def test_brand_in_use_cannot_be_deleted(session, add_vendor, add_item):
    service = BrandService(session)
    brand = await service.create(LookupCreate(name="Omega"))
    vendor = await add_vendor()
    await add_item(vendor, brand_id=brand.id)
    await add_item(vendor, brand_id=brand.id)

    with pytest.raises(ConflictError, match="Cannot delete brand: referenced by 2 items"):
        await service.delete(brand.id)
    assert (await service.get(brand.id)).name == "Omega"


async def test_category_in_use_cannot_be_deleted(session, add_vendor, add_item):
    service = CategoryService(session)
    category = await service.create(LookupCreate(name="Watches"))
    await add_item(await add_vendor(), category_id=category.id)

    with pytest.raises(ConflictError, match="Cannot delete category: referenced by 1 items"):
        await service.delete(category.id)


async def test_payment_method_in_use_cannot_be_deleted(
    session, add_vendor, add_item, add_client, add_payment
):
    service = PaymentMethodService(session)
    transfer = await service.create(LookupCreate(name="transfer"))
    cash = await service.create(LookupCreate(name="cash"))
    await add_payment(await add_item(await add_vendor()), await add_client(), method="transfer")

    with pytest.raises(ConflictError, match="Cannot delete payment method: used in 1 payments"):
        await service.delete(transfer.id)

    await service.delete(cash.id)
    assert [m.name for m in await service.list()] == ["transfer"]


async def test_missing_lookup(session):
    with pytest.raises(NotFoundError, match="Payment Method with id missing not found"):
        await PaymentMethodService(session).update("missing", LookupUpdate(active=True))
