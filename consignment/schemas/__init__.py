"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py    — Vendor / Client DTOs
  item.py      — Item DTOs, item-with-vendor and profit rows
  contract.py  — Contract, ContractItemSnapshot, ContractTemplate
  expense.py   — ItemExpense DTOs
  payment.py   — ClientPayment / VendorPayout / InstallmentPlan DTOs
  metrics.py   — read-only aggregate responses
  catalog.py   — Brand / Category / PaymentMethod lookup DTOs
  user.py      — User DTOs
"""
