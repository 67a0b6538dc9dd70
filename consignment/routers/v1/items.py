"""Item router — CRUD plus the inventory reports."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.filters import CommonFilters
from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.item import (
    ItemCreate,
    ItemOut,
    ItemProfitOut,
    ItemUpdate,
    ItemWithVendorOut,
)
from consignment.services.item import ItemService

router = APIRouter(prefix="/items", tags=["Items"])


@router.get("", response_model=DataResponse[list[ItemWithVendorOut]])
async def list_items(
    vendor_id: Optional[str] = Query(default=None, alias="vendorId"),
    item_status: Optional[list[str]] = Query(default=None, alias="status"),
    brand_id: Optional[list[str]] = Query(default=None, alias="brandId"),
    category_id: Optional[list[str]] = Query(default=None, alias="categoryId"),
    session: AsyncSession = Depends(get_db),
):
    """List items with their vendor. Repeat ?status= / ?brandId= / ?categoryId= to match any of several."""
    filters = CommonFilters(item_statuses=item_status, brand_ids=brand_id, category_ids=category_id)
    return {"data": await ItemService(session).list_items(vendor_id=vendor_id, filters=filters)}


@router.get("/recent", response_model=DataResponse[list[ItemWithVendorOut]])
async def recent_items(
    limit: int = Query(default=10, ge=1, le=100),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await ItemService(session).get_recent_items(limit)}


@router.get("/top-performing", response_model=DataResponse[list[ItemProfitOut]])
async def top_performing_items(
    limit: int = Query(default=10, ge=1, le=100),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await ItemService(session).get_top_performing_items(limit)}


@router.get("/pending-payouts", response_model=DataResponse[list[ItemWithVendorOut]])
async def pending_payouts(session: AsyncSession = Depends(get_db)):
    return {"data": await ItemService(session).get_pending_payouts()}


@router.post("", response_model=DataResponse[ItemOut], status_code=status.HTTP_201_CREATED)
async def create_item(body: ItemCreate, session: AsyncSession = Depends(get_db)):
    item = await ItemService(session).create_item(body)
    return {"data": ItemOut.model_validate(item)}


@router.get("/{item_id}", response_model=DataResponse[ItemWithVendorOut])
async def get_item(item_id: str, session: AsyncSession = Depends(get_db)):
    return {"data": await ItemService(session).get_item(item_id)}


@router.patch("/{item_id}", response_model=DataResponse[ItemOut])
async def update_item(item_id: str, body: ItemUpdate, session: AsyncSession = Depends(get_db)):
    item = await ItemService(session).update_item(item_id, body)
    return {"data": ItemOut.model_validate(item)}


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, session: AsyncSession = Depends(get_db)):
    await ItemService(session).delete_item(item_id)
