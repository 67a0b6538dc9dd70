"""Vendor CRUD router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.contract import ContractWithRelationsOut
from consignment.schemas.vendor import VendorCreate, VendorOut, VendorUpdate
from consignment.services.contract import ContractService
from consignment.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("", response_model=DataResponse[list[VendorOut]])
async def list_vendors(session: AsyncSession = Depends(get_db)):
    """List all vendors, newest first."""
    vendors = await VendorService(session).list_vendors()
    return {"data": [VendorOut.model_validate(v) for v in vendors]}


@router.post("", response_model=DataResponse[VendorOut], status_code=status.HTTP_201_CREATED)
async def create_vendor(body: VendorCreate, session: AsyncSession = Depends(get_db)):
    vendor = await VendorService(session).create_vendor(body)
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut])
async def get_vendor(vendor_id: str, session: AsyncSession = Depends(get_db)):
    vendor = await VendorService(session).get_vendor(vendor_id)
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/{vendor_id}/contracts", response_model=DataResponse[list[ContractWithRelationsOut]])
async def list_vendor_contracts(vendor_id: str, session: AsyncSession = Depends(get_db)):
    return {"data": await ContractService(session).list_contracts_by_vendor(vendor_id)}


@router.patch("/{vendor_id}", response_model=DataResponse[VendorOut])
async def update_vendor(vendor_id: str, body: VendorUpdate, session: AsyncSession = Depends(get_db)):
    vendor = await VendorService(session).update_vendor(vendor_id, body)
    return {"data": VendorOut.model_validate(vendor)}


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(vendor_id: str, session: AsyncSession = Depends(get_db)):
    await VendorService(session).delete_vendor(vendor_id)
