"""Services package — all business logic lives here, never in routers.

Files:
  vendor.py             — Vendor CRUD with delete guards
  item.py               — Item CRUD, recent / top-performing / pending-payout reports
  contract.py           — Contract CRUD and transactional creation with item snapshots
  contract_template.py  — ContractTemplate CRUD and default-template handling
  expense.py            — ItemExpense CRUD
  payment.py            — client payments, vendor payouts, installments, clients
  metrics.py            — read-only payment aggregates
  auth.py               — users and password hashing

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
