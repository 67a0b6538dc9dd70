"""Payment service — client payments, vendor payouts, installment plans and clients.

Recording a client payment also moves the item along its sale lifecycle:
``in-store`` becomes ``reserved`` after a first partial payment, and any
item becomes ``sold`` once its payments reach the sales price.
"""


import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.config import settings
from consignment.core.db_helpers import to_db_date, to_db_numeric, to_db_timestamp
from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.core.filters import CommonFilters, item_filters, payment_filters
from consignment.db.base import atomic
from consignment.domain.item import Item
from consignment.domain.payment import ClientPayment, InstallmentPlan, VendorPayout
from consignment.domain.vendor import Client
from consignment.repositories.item import ItemRepository
from consignment.repositories.payment import (
    InstallmentRepository,
    PaymentRepository,
    PayoutRepository,
)
from consignment.repositories.vendor import ClientRepository, VendorRepository
from consignment.schemas.item import ItemOut
from consignment.schemas.payment import (
    InstallmentCreate,
    InstallmentUpdate,
    InstallmentWithRelationsOut,
    PaymentCreate,
    PaymentUpdate,
    PaymentWithRelationsOut,
    PayoutCreate,
    PayoutWithRelationsOut,
    UpcomingPayoutOut,
)
from consignment.schemas.vendor import ClientCreate, ClientUpdate, VendorOut

logger = logging.getLogger(__name__)

_SHORTFALL_RATE = Decimal("0.01")


def next_item_status(item: Item, total_paid: Decimal) -> str | None:
    """Status *item* should move to after payments totalling *total_paid*, or None to keep it."""
    price = item.min_sales_price or item.max_sales_price or Decimal("0")
    if total_paid >= price and item.status != "sold":
        return "sold"
    if total_paid > 0 and item.status == "in-store":
        return "reserved"
    return None


def vendor_payout_target(max_sales_price: Decimal, sale_price: Decimal, max_cost: Decimal) -> Decimal:
    """What the vendor is owed for an item sold at *sale_price*.

    The vendor's ``max_cost`` shrinks by one percent for every unit the sale
    fell short of ``max_sales_price``.
    """
    return (1 - (max_sales_price - sale_price) * _SHORTFALL_RATE) * max_cost


class PaymentService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._payments = PaymentRepository(session)
        self._payouts = PayoutRepository(session)
        self._installments = InstallmentRepository(session)
        self._items = ItemRepository(session)
        self._vendors = VendorRepository(session)
        self._clients = ClientRepository(session)

    async def _require_item(self, item_id: str) -> Item:
        item = await self._items.get_by_id(item_id)
        if not item:
            raise NotFoundError("Item", item_id)
        return item

    async def _require_client(self, client_id: str) -> None:
        if not await self._clients.get_by_id(client_id):
            raise NotFoundError("Client", client_id)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    async def list_clients(self) -> list[Client]:
        return await self._clients.list()

    async def get_client(self, client_id: str) -> Client:
        client = await self._clients.get_by_id(client_id)
        if not client:
            raise NotFoundError("Client", client_id)
        return client

    async def create_client(self, data: ClientCreate) -> Client:
        return await self._clients.create(**data.model_dump())

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        _ = await self.get_client(client_id)
        updated = await self._clients.update(client_id, **data.changes())
        return updated  # type: ignore[return-value]

    async def delete_client(self, client_id: str) -> None:
        _ = await self.get_client(client_id)

        guards = (
            (self._payments, ClientPayment.client_id, "payment records"),
            (self._installments, InstallmentPlan.client_id, "installment plans"),
        )
        for repo, column, label in guards:
            count = await repo.count_where(column == client_id)
            if count > 0:
                logger.warning("Refused to delete client %s: %d %s", client_id, count, label)
                raise ConflictError(f"Cannot delete client: has {count} {label}")

        await self._clients.delete(client_id)
        logger.info("Deleted client %s", client_id)

    # ------------------------------------------------------------------
    # Client payments
    # ------------------------------------------------------------------

    async def list_payments(
        self, filters: CommonFilters | None = None, limit: int | None = None
    ) -> list[PaymentWithRelationsOut]:
        conditions = payment_filters(filters) + item_filters(filters)
        rows = await self._payments.list_with_relations(*conditions, limit=limit)
        return [PaymentWithRelationsOut.from_row(*row) for row in rows]

    async def list_payments_by_item(self, item_id: str) -> list[ClientPayment]:
        return await self._payments.list(ClientPayment.item_id == item_id)

    async def create_payment(self, data: PaymentCreate) -> ClientPayment:
        async with atomic(self._session):
            item = await self._require_item(data.item_id)
            await self._require_client(data.client_id)

            payment = await self._payments.create(
                item_id=data.item_id,
                client_id=data.client_id,
                payment_method=data.payment_method,
                amount=to_db_numeric(data.amount),
                paid_at=to_db_timestamp(data.paid_at),
            )

            total_paid = await self._payments.sum_amount(ClientPayment.item_id == data.item_id)
            status = next_item_status(item, total_paid)
            if status:
                await self._items.update(item.id, status=status)
                logger.info("Item %s is now %s (paid %s)", item.id, status, total_paid)

        return payment

    async def update_payment(self, payment_id: str, data: PaymentUpdate) -> ClientPayment:
        if not await self._payments.get_by_id(payment_id):
            raise NotFoundError("Payment", payment_id)

        changes = {k: v for k, v in data.changes().items() if v is not None}
        if "amount" in changes:
            changes["amount"] = to_db_numeric(changes["amount"])
        if "paid_at" in changes:
            changes["paid_at"] = to_db_timestamp(changes["paid_at"])

        updated = await self._payments.update(payment_id, **changes)
        return updated  # type: ignore[return-value]

    async def delete_payment(self, payment_id: str) -> None:
        if not await self._payments.delete(payment_id):
            raise NotFoundError("Payment", payment_id)

    # ------------------------------------------------------------------
    # Vendor payouts
    # ------------------------------------------------------------------

    async def list_payouts(self, limit: int | None = None) -> list[PayoutWithRelationsOut]:
        rows = await self._payouts.list_with_relations(limit=limit)
        return [PayoutWithRelationsOut.from_row(*row) for row in rows]

    async def create_payout(self, data: PayoutCreate) -> VendorPayout:
        await self._require_item(data.item_id)
        if not await self._vendors.get_by_id(data.vendor_id):
            raise NotFoundError("Vendor", data.vendor_id)

        payout = await self._payouts.create(
            item_id=data.item_id,
            vendor_id=data.vendor_id,
            amount=to_db_numeric(data.amount),
            paid_at=to_db_timestamp(data.paid_at),
            bank_account=data.bank_account,
            transfer_id=data.transfer_id,
            notes=data.notes,
        )
        logger.info("Recorded payout %s to vendor %s", payout.id, payout.vendor_id)
        return payout

    async def get_upcoming_payouts(self) -> list[UpcomingPayoutOut]:
        """Every sold item with what its vendor is owed and how much of it is paid."""
        results = []
        rows = await self._payouts.sold_item_summaries()
        for item, vendor, collected, paid, first_paid_at, last_paid_at in rows:
            sale_price = Decimal(str(collected))
            total_paid = Decimal(str(paid))
            target = vendor_payout_target(
                item.max_sales_price or Decimal("0"), sale_price, item.max_cost or Decimal("0")
            )
            progress = float(total_paid / target * 100) if target > 0 else 0.0
            results.append(
                UpcomingPayoutOut(
                    item=ItemOut.model_validate(item),
                    vendor=VendorOut.model_validate(vendor),
                    sale_price=sale_price,
                    vendor_payout_amount=target,
                    total_paid=total_paid,
                    remaining_balance=max(Decimal("0"), target - total_paid),
                    payment_progress=progress,
                    is_fully_paid=progress >= 100,
                    first_payout_date=first_paid_at,
                    last_payout_date=last_paid_at,
                )
            )
        return results

    # ------------------------------------------------------------------
    # Installment plans
    # ------------------------------------------------------------------

    async def list_installments(self, client_id: str | None = None) -> list[InstallmentWithRelationsOut]:
        conditions = [InstallmentPlan.client_id == client_id] if client_id else []
        rows = await self._installments.list_with_relations(*conditions)
        return [InstallmentWithRelationsOut.from_row(*row) for row in rows]

    async def create_installment(self, data: InstallmentCreate) -> InstallmentPlan:
        await self._require_item(data.item_id)
        await self._require_client(data.client_id)
        return await self._installments.create(
            item_id=data.item_id,
            client_id=data.client_id,
            amount=to_db_numeric(data.amount),
            due_date=to_db_date(data.due_date),
        )

    async def get_installment(self, installment_id: str) -> InstallmentWithRelationsOut:
        row = await self._installments.get_with_relations(installment_id)
        if not row:
            raise NotFoundError("Installment Plan", installment_id)
        return InstallmentWithRelationsOut.from_row(*row)

    async def update_installment(self, installment_id: str, data: InstallmentUpdate) -> InstallmentPlan:
        if not await self._installments.get_by_id(installment_id):
            raise NotFoundError("Installment Plan", installment_id)

        changes = {k: v for k, v in data.changes().items() if v is not None}
        if "amount" in changes:
            changes["amount"] = to_db_numeric(changes["amount"])
        if "due_date" in changes:
            changes["due_date"] = to_db_date(changes["due_date"])

        updated = await self._installments.update(installment_id, **changes)
        return updated  # type: ignore[return-value]

    async def delete_installment(self, installment_id: str) -> None:
        if not await self._installments.delete(installment_id):
            raise NotFoundError("Installment Plan", installment_id)

    async def mark_installment_paid(self, installment_id: str, paid_amount) -> InstallmentPlan:
        """Add *paid_amount* to the plan; it is ``paid`` once the total covers the amount due."""
        plan = await self._installments.get_by_id(installment_id)
        if not plan:
            raise NotFoundError("Installment Plan", installment_id)

        total_paid = (plan.paid_amount or Decimal("0")) + to_db_numeric(paid_amount)
        status = "paid" if total_paid >= plan.amount else "pending"
        updated = await self._installments.update(
            installment_id, paid_amount=to_db_numeric(total_paid), status=status
        )
        logger.info("Installment %s paid %s of %s (%s)", installment_id, total_paid, plan.amount, status)
        return updated  # type: ignore[return-value]

    async def get_upcoming_payments(
        self, limit: int = 10, today: date | None = None
    ) -> list[InstallmentWithRelationsOut]:
        """Pending installments due within the reminder window, soonest first. Overdue ones are included."""
        today = today or datetime.now(timezone.utc).date()
        horizon = today + timedelta(days=settings.installment_reminder_days)
        rows = await self._installments.list_with_relations(
            InstallmentPlan.status == "pending",
            InstallmentPlan.due_date <= horizon,
            order="asc",
            limit=limit,
        )
        return [InstallmentWithRelationsOut.from_row(*row) for row in rows]

    async def get_overdue_payments(self, today: date | None = None) -> list[InstallmentWithRelationsOut]:
        today = today or datetime.now(timezone.utc).date()
        rows = await self._installments.list_with_relations(
            InstallmentPlan.status == "pending",
            InstallmentPlan.due_date <= today,
            order="asc",
        )
        return [InstallmentWithRelationsOut.from_row(*row) for row in rows]
