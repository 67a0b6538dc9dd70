"""Consignment API — vendors, consigned items, contracts, expenses, payments and metrics."""
