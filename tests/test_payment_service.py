from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.core.filters import CommonFilters
from consignment.domain.item import Item
from consignment.repositories.item import ItemRepository
from consignment.repositories.payment import PaymentRepository
from consignment.schemas.payment import (
    InstallmentCreate,
    InstallmentUpdate,
    PaymentCreate,
    PaymentUpdate,
    PayoutCreate,
)
from consignment.schemas.vendor import ClientCreate, ClientUpdate
from consignment.services.payment import PaymentService, next_item_status, vendor_payout_target


@pytest.mark.parametrize(
    "status, paid, expected",
    [
        ("in-store", "0", None),
        ("in-store", "100", "reserved"),
        ("reserved", "100", None),
        ("in-store", "8000", "sold"),
        ("reserved", "9000", "sold"),
        ("sold", "9000", None),
    ],
)
def test_next_item_status(status, paid, expected):
    item = Item(status=status, min_sales_price=Decimal("8000.00"))
    assert next_item_status(item, Decimal(paid)) == expected


async def test_payments_move_item_through_sale(session, add_vendor, add_item, add_client):
    item = await add_item(await add_vendor())
    client = await add_client()
    service = PaymentService(session)
    items = ItemRepository(session)

    await service.create_payment(
        PaymentCreate(itemId=item.id, clientId=client.id, paymentMethod="transfer", amount="3000")
    )
    assert (await items.get_by_id(item.id)).status == "reserved"

    await service.create_payment(
        PaymentCreate(item_id=item.id, client_id=client.id, payment_method="cash", amount=5000)
    )
    assert (await items.get_by_id(item.id)).status == "sold"
    assert len(await service.list_payments_by_item(item.id)) == 2


async def test_payment_for_unknown_client_records_nothing(session, add_vendor, add_item):
    item = await add_item(await add_vendor())
    with pytest.raises(NotFoundError, match="Client"):
        await PaymentService(session).create_payment(
            PaymentCreate(item_id=item.id, client_id="missing", payment_method="cash", amount=10)
        )
    assert await PaymentRepository(session).count_where() == 0
    assert (await ItemRepository(session).get_by_id(item.id)).status == "in-store"


async def test_list_payments_filters_by_client_and_date(
    session, add_vendor, add_item, add_client, add_payment
):
    item = await add_item(await add_vendor())
    ana = await add_client(name="Ana")
    ben = await add_client(name="Ben")
    await add_payment(item, ana, paid_at=datetime(2026, 3, 5, tzinfo=timezone.utc))
    await add_payment(item, ana, paid_at=datetime(2026, 4, 5, tzinfo=timezone.utc))
    await add_payment(item, ben, paid_at=datetime(2026, 3, 6, tzinfo=timezone.utc))

    service = PaymentService(session)
    assert len(await service.list_payments()) == 3

    march_for_ana = await service.list_payments(
        CommonFilters(client_ids=[ana.id], start_date="2026-03-01", end_date="2026-03-31")
    )
    assert len(march_for_ana) == 1
    assert march_for_ana[0].client.name == "Ana"
    assert march_for_ana[0].item.id == item.id


async def test_delete_payment(session, add_vendor, add_item, add_client, add_payment):
    payment = await add_payment(await add_item(await add_vendor()), await add_client())
    service = PaymentService(session)

    await service.delete_payment(payment.id)
    with pytest.raises(NotFoundError):
        await service.delete_payment(payment.id)


async def test_create_and_list_payouts(session, add_vendor, add_item):
    vendor = await add_vendor(name="Ana")
    item = await add_item(vendor)
    service = PaymentService(session)

    payout = await service.create_payout(
        PayoutCreate(item_id=item.id, vendor_id=vendor.id, amount="4500.5", transfer_id="TX-1")
    )
    assert payout.amount == Decimal("4500.50")

    listed = await service.list_payouts()
    assert [p.id for p in listed] == [payout.id]
    assert listed[0].vendor.name == "Ana"


async def test_payout_for_unknown_vendor(session, add_vendor, add_item):
    item = await add_item(await add_vendor())
    with pytest.raises(NotFoundError, match="Vendor"):
        await PaymentService(session).create_payout(
            PayoutCreate(item_id=item.id, vendor_id="missing", amount=1)
        )


async def test_installments_by_client(session, add_vendor, add_item, add_client):
    item = await add_item(await add_vendor())
    ana = await add_client(name="Ana")
    ben = await add_client(name="Ben")
    service = PaymentService(session)

    plan = await service.create_installment(
        InstallmentCreate(item_id=item.id, client_id=ana.id, amount="1000", due_date="2026-07-01")
    )
    await service.create_installment(
        InstallmentCreate(item_id=item.id, client_id=ben.id, amount="1000", due_date=date(2026, 8, 1))
    )

    assert plan.status == "pending"
    assert plan.paid_amount == Decimal("0")
    assert plan.due_date == date(2026, 7, 1)

    for_ana = await service.list_installments(ana.id)
    assert [p.id for p in for_ana] == [plan.id]
    assert len(await service.list_installments()) == 2


async def test_clients(session):
    service = PaymentService(session)
    client = await service.create_client(ClientCreate(name="Pedro", idNumber="9.876.543-2"))
    assert client.id_number == "9.876.543-2"
    assert [c.id for c in await service.list_clients()] == [client.id]


async def test_get_update_and_delete_client(session):
    service = PaymentService(session)
    client = await service.create_client(ClientCreate(name="Pedro", phone="555-0101"))

    updated = await service.update_client(client.id, ClientUpdate(email="pedro@example.com"))
    assert updated.email == "pedro@example.com"
    assert updated.phone == "555-0101"

    await service.delete_client(client.id)
    with pytest.raises(NotFoundError, match="Client with id"):
        await service.get_client(client.id)


async def test_client_with_payments_cannot_be_deleted(
    session, add_vendor, add_item, add_client, add_payment
):
    client = await add_client()
    await add_payment(await add_item(await add_vendor()), client)

    with pytest.raises(ConflictError, match="Cannot delete client: has 1 payment records"):
        await PaymentService(session).delete_client(client.id)


async def test_client_with_installments_cannot_be_deleted(
    session, add_vendor, add_item, add_client, add_installment
):
    client = await add_client()
    item = await add_item(await add_vendor())
    await add_installment(item, client, due_date=date(2026, 7, 1))
    await add_installment(item, client, due_date=date(2026, 8, 1))

    with pytest.raises(ConflictError, match="Cannot delete client: has 2 installment plans"):
        await PaymentService(session).delete_client(client.id)


async def test_update_payment_normalizes_and_skips_nulls(
    session, add_vendor, add_item, add_client, add_payment
):
    payment = await add_payment(await add_item(await add_vendor()), await add_client(), method="cash")

    updated = await PaymentService(session).update_payment(
        payment.id,
        PaymentUpdate(amount="250.5", paidAt="2026-05-01", paymentMethod=None),
    )
    assert updated.amount == Decimal("250.50")
    assert updated.payment_method == "cash"
    assert updated.paid_at.date() == date(2026, 5, 1)


async def test_update_missing_payment(session):
    with pytest.raises(NotFoundError, match="Payment with id missing not found"):
        await PaymentService(session).update_payment("missing", PaymentUpdate(amount=1))


async def test_installment_get_update_delete(session, add_vendor, add_item, add_client, add_installment):
    item = await add_item(await add_vendor())
    plan = await add_installment(item, await add_client(), due_date=date(2026, 7, 1))
    service = PaymentService(session)

    fetched = await service.get_installment(plan.id)
    assert fetched.client.name == "Pedro Soto"
    assert fetched.vendor.name == "Ana Rojas"

    updated = await service.update_installment(plan.id, InstallmentUpdate(dueDate="2026-07-15", amount=None))
    assert updated.due_date == date(2026, 7, 15)
    assert updated.amount == Decimal("200.00")

    await service.delete_installment(plan.id)
    with pytest.raises(NotFoundError, match="Installment Plan"):
        await service.get_installment(plan.id)
    with pytest.raises(NotFoundError, match="Installment Plan"):
        await service.delete_installment(plan.id)


async def test_mark_installment_paid_accumulates(session, add_vendor, add_item, add_client, add_installment):
    item = await add_item(await add_vendor())
    plan = await add_installment(item, await add_client(), due_date=date(2026, 7, 1))
    service = PaymentService(session)

    partial = await service.mark_installment_paid(plan.id, "150")
    assert partial.paid_amount == Decimal("150.00")
    assert partial.status == "pending"

    settled = await service.mark_installment_paid(plan.id, 50)
    assert settled.paid_amount == Decimal("200.00")
    assert settled.status == "paid"


async def test_mark_unknown_installment_paid(session):
    with pytest.raises(NotFoundError, match="Installment Plan with id missing not found"):
        await PaymentService(session).mark_installment_paid("missing", 10)


async def test_upcoming_and_overdue_installments(
    session, add_vendor, add_item, add_client, add_installment
):
    item = await add_item(await add_vendor())
    client = await add_client()
    late = await add_installment(item, client, due_date=date(2026, 6, 25))
    soon = await add_installment(item, client, due_date=date(2026, 7, 3))
    await add_installment(item, client, due_date=date(2026, 7, 2), status="paid")
    await add_installment(item, client, due_date=date(2026, 7, 20))
    service = PaymentService(session)
    today = date(2026, 6, 30)

    upcoming = await service.get_upcoming_payments(today=today)
    assert [p.id for p in upcoming] == [late.id, soon.id]
    assert [p.id for p in await service.get_upcoming_payments(limit=1, today=today)] == [late.id]

    overdue = await service.get_overdue_payments(today=today)
    assert [p.id for p in overdue] == [late.id]


@pytest.mark.parametrize(
    "sale_price, expected",
    [
        ("9500", "6000"),
        ("9450", "3000"),
    ],
)
def test_vendor_payout_target(sale_price, expected):
    target = vendor_payout_target(Decimal("9500"), Decimal(sale_price), Decimal("6000"))
    assert target == Decimal(expected)


async def test_upcoming_payouts_track_vendor_balance(
    session, add_vendor, add_item, add_client, add_payment, add_payout
):
    vendor = await add_vendor(name="Ana")
    client = await add_client()
    sold = await add_item(vendor, status="sold")
    await add_item(vendor)
    await add_payment(sold, client, amount="9500.00")
    await add_payout(sold, vendor, amount="1500.00")
    await add_payout(sold, vendor, amount="4500.00")

    [row] = await PaymentService(session).get_upcoming_payouts()

    assert row.item.id == sold.id
    assert row.vendor.name == "Ana"
    assert row.sale_price == Decimal("9500")
    assert row.vendor_payout_amount == Decimal("6000")
    assert row.total_paid == Decimal("6000")
    assert row.remaining_balance == Decimal("0")
    assert row.payment_progress == pytest.approx(100.0)
    assert row.is_fully_paid is True
    assert row.first_payout_date is not None
    assert row.last_payout_date is not None


async def test_upcoming_payout_without_payouts(session, add_vendor, add_item, add_client, add_payment):
    vendor = await add_vendor()
    sold = await add_item(vendor, status="sold")
    await add_payment(sold, await add_client(), amount="9500.00")

    [row] = await PaymentService(session).get_upcoming_payouts()

    assert row.total_paid == Decimal("0")
    assert row.remaining_balance == Decimal("6000")
    assert row.payment_progress == 0
    assert row.is_fully_paid is False
    assert row.first_payout_date is None


async def test_recent_payouts_limit(session, add_vendor, add_item, add_payout):
    vendor = await add_vendor()
    item = await add_item(vendor)
    await add_payout(item, vendor, paid_at=datetime(2026, 5, 1, tzinfo=timezone.utc))
    latest = await add_payout(item, vendor, paid_at=datetime(2026, 6, 1, tzinfo=timezone.utc))

    recent = await PaymentService(session).list_payouts(limit=1)
    assert [p.id for p in recent] == [latest.id]
