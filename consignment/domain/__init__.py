"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py    — Vendor (consignor) and Client (buyer)
  item.py      — consigned Item plus Brand / Category lookups
  payment.py   — ClientPayment, VendorPayout, InstallmentPlan, PaymentMethod
  expense.py   — ItemExpense (item-level or general)
  contract.py  — Contract and ContractTemplate
  user.py      — application User
  mixins.py    — UUID primary key and created_at mixins
"""

from consignment.domain.contract import Contract, ContractTemplate
from consignment.domain.expense import ItemExpense
from consignment.domain.item import Brand, Category, Item
from consignment.domain.payment import ClientPayment, InstallmentPlan, PaymentMethod, VendorPayout
from consignment.domain.user import User
from consignment.domain.vendor import Client, Vendor

__all__ = [
    "Brand",
    "Category",
    "Client",
    "ClientPayment",
    "Contract",
    "ContractTemplate",
    "InstallmentPlan",
    "Item",
    "ItemExpense",
    "PaymentMethod",
    "User",
    "Vendor",
    "VendorPayout",
]
