"""v1 router package — all /api/v1/* endpoints live here.

Files:
  vendors.py    — vendor CRUD
  items.py      — item CRUD and inventory reports
  contracts.py  — contracts and contract templates
  expenses.py   — expense CRUD
  payments.py   — clients, payments, payouts, installments
  metrics.py    — payment metrics

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to consignment/services/.
"""
