"""Shared fixtures: a throwaway SQLite database per test and small row builders."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import consignment.domain  # noqa: F401  (register every table on Base.metadata)
from consignment.db.base import Base, build_engine
from consignment.domain.contract import Contract, ContractTemplate
from consignment.domain.expense import ItemExpense
from consignment.domain.item import Item
from consignment.domain.payment import ClientPayment, InstallmentPlan, VendorPayout
from consignment.domain.vendor import Client, Vendor


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Row builders: insert directly, bypassing services
# ---------------------------------------------------------------------------

async def _add(session: AsyncSession, instance):
    session.add(instance)
    await session.flush()
    return instance


@pytest.fixture
def add_vendor(session):
    async def _make(**overrides) -> Vendor:
        fields = {"name": "Ana Rojas", "email": "ana@example.com", "tax_id": "12.345.678-9"}
        fields.update(overrides)
        return await _add(session, Vendor(**fields))
    return _make


@pytest.fixture
def add_client(session):
    async def _make(**overrides) -> Client:
        fields = {"name": "Pedro Soto", "email": "pedro@example.com"}
        fields.update(overrides)
        return await _add(session, Client(**fields))
    return _make


@pytest.fixture
def add_item(session):
    async def _make(vendor: Vendor, **overrides) -> Item:
        fields = {
            "vendor_id": vendor.id,
            "title": "Rolex Submariner",
            "brand": "Rolex",
            "model": "116610LN",
            "serial_no": "Z123456",
            "condition": "excellent",
            "acquisition_date": date(2026, 1, 15),
            "min_cost": Decimal("5000.00"),
            "max_cost": Decimal("6000.00"),
            "min_sales_price": Decimal("8000.00"),
            "max_sales_price": Decimal("9500.00"),
            "status": "in-store",
        }
        fields.update(overrides)
        return await _add(session, Item(**fields))
    return _make


@pytest.fixture
def add_payment(session):
    async def _make(item: Item, client: Client, amount="100.00", paid_at=None, method="cash") -> ClientPayment:
        return await _add(
            session,
            ClientPayment(
                item_id=item.id,
                client_id=client.id,
                payment_method=method,
                amount=Decimal(amount),
                paid_at=paid_at or datetime.now(timezone.utc),
            ),
        )
    return _make


@pytest.fixture
def add_payout(session):
    async def _make(item: Item, vendor: Vendor, amount="100.00", paid_at=None) -> VendorPayout:
        return await _add(
            session,
            VendorPayout(
                item_id=item.id,
                vendor_id=vendor.id,
                amount=Decimal(amount),
                paid_at=paid_at or datetime.now(timezone.utc),
            ),
        )
    return _make


@pytest.fixture
def add_expense(session):
    async def _make(item: Item | None, amount="50.00", expense_type="repair") -> ItemExpense:
        return await _add(
            session,
            ItemExpense(
                item_id=item.id if item else None,
                expense_type=expense_type,
                amount=Decimal(amount),
                incurred_at=datetime.now(timezone.utc),
            ),
        )
    return _make


@pytest.fixture
def add_installment(session):
    async def _make(item: Item, client: Client, due_date: date, status="pending", amount="200.00") -> InstallmentPlan:
        return await _add(
            session,
            InstallmentPlan(
                item_id=item.id,
                client_id=client.id,
                amount=Decimal(amount),
                due_date=due_date,
                status=status,
            ),
        )
    return _make


@pytest.fixture
def add_template(session):
    async def _make(name="Standard", terms_text="Template terms", is_default=False) -> ContractTemplate:
        return await _add(session, ContractTemplate(name=name, terms_text=terms_text, is_default=is_default))
    return _make


@pytest.fixture
def add_contract(session):
    async def _make(vendor: Vendor, status="draft") -> Contract:
        return await _add(
            session,
            Contract(vendor_id=vendor.id, status=status, terms_text="terms", item_snapshots=[]),
        )
    return _make
