"""Composable WHERE-clause builders shared by list and report queries."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement, and_

from consignment.core.db_helpers import to_db_timestamp
from consignment.domain.item import Item
from consignment.domain.payment import ClientPayment


class CommonFilters(BaseModel):
    """Optional narrowing shared by item and payment listings. Empty lists mean "no filter"."""

    vendor_ids: list[str] | None = None
    client_ids: list[str] | None = None
    brand_ids: list[str] | None = None
    category_ids: list[str] | None = None
    item_statuses: list[str] | None = None
    start_date: date | datetime | str | None = None
    end_date: date | datetime | str | None = None


def item_filters(filters: CommonFilters | None) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters is None:
        return conditions

    if filters.vendor_ids:
        conditions.append(Item.vendor_id.in_(filters.vendor_ids))
    if filters.brand_ids:
        conditions.append(Item.brand_id.in_(filters.brand_ids))
    if filters.category_ids:
        conditions.append(Item.category_id.in_(filters.category_ids))
    if filters.item_statuses:
        conditions.append(Item.status.in_(filters.item_statuses))
    return conditions


def payment_filters(filters: CommonFilters | None) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters is None:
        return conditions

    if filters.client_ids:
        conditions.append(ClientPayment.client_id.in_(filters.client_ids))
    conditions.extend(date_range(ClientPayment.paid_at, filters.start_date, filters.end_date))
    return conditions


def date_range(column: Any, start_date=None, end_date=None) -> list[ColumnElement[bool]]:
    """Inclusive bounds on a timestamp column; either side may be omitted."""
    conditions: list[ColumnElement[bool]] = []
    if start_date is not None:
        conditions.append(column >= to_db_timestamp(start_date))
    if end_date is not None:
        conditions.append(column <= to_db_timestamp(end_date))
    return conditions


def combine_conditions(conditions: list[ColumnElement[bool]]) -> ColumnElement[bool] | None:
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return and_(*conditions)
