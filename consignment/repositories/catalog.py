"""Lookup repositories: brands, categories and payment methods."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy import func

from consignment.domain.item import Brand, Category
from consignment.domain.payment import PaymentMethod
from consignment.repositories.base import BaseRepository

LookupT = TypeVar("LookupT", Brand, Category, PaymentMethod)


class LookupRepository(BaseRepository[LookupT]):
    """Name-keyed lookup rows; names are unique case-insensitively."""

    async def get_by_name(self, name: str) -> LookupT | None:
        rows = await self.list(func.lower(self.model.name) == name.strip().lower(), limit=1)
        return rows[0] if rows else None


class BrandRepository(LookupRepository[Brand]):
    model = Brand


class CategoryRepository(LookupRepository[Category]):
    model = Category


class PaymentMethodRepository(LookupRepository[PaymentMethod]):
    model = PaymentMethod
