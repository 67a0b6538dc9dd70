"""Repositories package — all SQLAlchemy queries live here, never in services or routers.

Files:
  base.py      — BaseRepository (get / list / create / sparse update / delete / count_where)
  catalog.py   — Brand, Category, PaymentMethod lookups (by-name lookup)
  vendor.py    — Vendor, Client
  item.py      — Item (+ vendor join, profit and outstanding-payout aggregates)
  contract.py  — Contract (+ vendor/template join), ContractTemplate (default handling)
  expense.py   — ItemExpense
  payment.py   — ClientPayment, VendorPayout, InstallmentPlan
  user.py      — User
"""
