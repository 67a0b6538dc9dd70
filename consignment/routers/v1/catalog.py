"""Brand, category and payment-method lookup routers.

The three lookups expose the same five routes, so one builder wires them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.catalog import LookupCreate, LookupOut, LookupUpdate
from consignment.services.catalog import BrandService, CategoryService, PaymentMethodService


def _lookup_router(prefix: str, tag: str, service_class) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=DataResponse[list[LookupOut]])
    async def list_lookups(session: AsyncSession = Depends(get_db)):
        rows = await service_class(session).list()
        return {"data": [LookupOut.model_validate(r) for r in rows]}

    @router.post("", response_model=DataResponse[LookupOut], status_code=status.HTTP_201_CREATED)
    async def create_lookup(body: LookupCreate, session: AsyncSession = Depends(get_db)):
        row = await service_class(session).create(body)
        return {"data": LookupOut.model_validate(row)}

    @router.get("/{entity_id}", response_model=DataResponse[LookupOut])
    async def get_lookup(entity_id: str, session: AsyncSession = Depends(get_db)):
        row = await service_class(session).get(entity_id)
        return {"data": LookupOut.model_validate(row)}

    @router.patch("/{entity_id}", response_model=DataResponse[LookupOut])
    async def update_lookup(entity_id: str, body: LookupUpdate, session: AsyncSession = Depends(get_db)):
        row = await service_class(session).update(entity_id, body)
        return {"data": LookupOut.model_validate(row)}

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_lookup(entity_id: str, session: AsyncSession = Depends(get_db)):
        await service_class(session).delete(entity_id)

    return router


brands_router = _lookup_router("/brands", "Brands", BrandService)
categories_router = _lookup_router("/categories", "Categories", CategoryService)
payment_methods_router = _lookup_router("/payment-methods", "Payment Methods", PaymentMethodService)
