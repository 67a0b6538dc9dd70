"""Reusable SELECT shapes joining an entity with the rows it is usually shown with.

Each function returns a fresh ``Select`` so callers can keep chaining
``where`` / ``order_by`` / ``limit``.
"""

from __future__ import annotations

from sqlalchemy import Select, select

from consignment.domain.contract import Contract, ContractTemplate
from consignment.domain.expense import ItemExpense
from consignment.domain.item import Brand, Category, Item
from consignment.domain.payment import ClientPayment, InstallmentPlan, VendorPayout
from consignment.domain.vendor import Client, Vendor


def item_with_vendor() -> Select:
    """Rows of ``(Item, Vendor)``."""
    return select(Item, Vendor).join(Vendor, Item.vendor_id == Vendor.id)


def item_with_relations() -> Select:
    """Rows of ``(Item, Vendor, Brand | None, Category | None)``."""
    return (
        select(Item, Vendor, Brand, Category)
        .join(Vendor, Item.vendor_id == Vendor.id)
        .outerjoin(Brand, Item.brand_id == Brand.id)
        .outerjoin(Category, Item.category_id == Category.id)
    )


def payment_with_relations() -> Select:
    """Rows of ``(ClientPayment, Item, Vendor, Client)``."""
    return (
        select(ClientPayment, Item, Vendor, Client)
        .join(Item, ClientPayment.item_id == Item.id)
        .join(Vendor, Item.vendor_id == Vendor.id)
        .join(Client, ClientPayment.client_id == Client.id)
    )


def payout_with_relations() -> Select:
    """Rows of ``(VendorPayout, Item, Vendor)``."""
    return (
        select(VendorPayout, Item, Vendor)
        .join(Item, VendorPayout.item_id == Item.id)
        .join(Vendor, VendorPayout.vendor_id == Vendor.id)
    )


def installment_with_relations() -> Select:
    """Rows of ``(InstallmentPlan, Item, Vendor, Client)``."""
    return (
        select(InstallmentPlan, Item, Vendor, Client)
        .join(Item, InstallmentPlan.item_id == Item.id)
        .join(Vendor, Item.vendor_id == Vendor.id)
        .join(Client, InstallmentPlan.client_id == Client.id)
    )


def expense_with_item() -> Select:
    """Rows of ``(ItemExpense, Item | None)``; general expenses have no item."""
    return select(ItemExpense, Item).outerjoin(Item, ItemExpense.item_id == Item.id)


def contract_with_relations() -> Select:
    """Rows of ``(Contract, Vendor, ContractTemplate | None)``."""
    return (
        select(Contract, Vendor, ContractTemplate)
        .join(Vendor, Contract.vendor_id == Vendor.id)
        .outerjoin(ContractTemplate, Contract.template_id == ContractTemplate.id)
    )
