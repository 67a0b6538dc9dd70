"""Catalog service — brand, category and payment-method lookups.

The three lookups share one shape (unique name + active flag) and one rule:
a lookup still referenced by other rows cannot be deleted.
"""


import logging

from sqlalchemy import ColumnElement
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.exceptions import ConflictError, NotFoundError, handle_database_error
from consignment.domain.item import Item
from consignment.domain.payment import ClientPayment
from consignment.repositories.base import BaseRepository
from consignment.repositories.catalog import (
    BrandRepository,
    CategoryRepository,
    LookupRepository,
    PaymentMethodRepository,
)
from consignment.repositories.item import ItemRepository
from consignment.repositories.payment import PaymentRepository
from consignment.schemas.catalog import LookupCreate, LookupUpdate

logger = logging.getLogger(__name__)

class _LookupService:
    entity: str
    repo_class: type[LookupRepository]

    def __init__(self, session: AsyncSession):
        self._session = session
        self._repo = self.repo_class(session)

    async def _references(self, row) -> tuple[BaseRepository, ColumnElement[bool], str]:
        """(repository, condition, phrase) counting the rows that point at *row*."""
        raise NotImplementedError

    async def _ensure_name_free(self, name: str, entity_id: str | None = None) -> None:
        existing = await self._repo.get_by_name(name)
        if existing and existing.id != entity_id:
            raise ConflictError(f"{self.entity} '{name}' already exists")

    async def list(self):
        return await self._repo.list()

    async def get(self, entity_id: str):
        row = await self._repo.get_by_id(entity_id)
        if not row:
            raise NotFoundError(self.entity, entity_id)
        return row

    async def create(self, data: LookupCreate):
        name = data.name.strip()
        await self._ensure_name_free(name)
        try:
            row = await self._repo.create(name=name, active=data.active)
        except IntegrityError as exc:
            handle_database_error(exc, f"create {self.entity.lower()}")
        logger.info("Created %s %s (%s)", self.entity.lower(), row.id, row.name)
        return row

    async def update(self, entity_id: str, data: LookupUpdate):
        _ = await self.get(entity_id)

        changes = {k: v for k, v in data.changes().items() if v is not None}
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            await self._ensure_name_free(changes["name"], entity_id)
        try:
            updated = await self._repo.update(entity_id, **changes)
        except IntegrityError as exc:
            handle_database_error(exc, f"update {self.entity.lower()}")
        return updated

    async def delete(self, entity_id: str) -> None:
        row = await self.get(entity_id)

        repo, condition, phrase = await self._references(row)
        count = await repo.count_where(condition)
        if count > 0:
            logger.warning("Refused to delete %s %s: %d references", self.entity.lower(), entity_id, count)
            raise ConflictError(f"Cannot delete {self.entity.lower()}: {phrase.format(count=count)}")

        await self._repo.delete(entity_id)
        logger.info("Deleted %s %s", self.entity.lower(), entity_id)


class BrandService(_LookupService):
    entity = "Brand"
    repo_class = BrandRepository

    async def _references(self, row):
        return ItemRepository(self._session), Item.brand_id == row.id, "referenced by {count} items"


class CategoryService(_LookupService):
    entity = "Category"
    repo_class = CategoryRepository

    async def _references(self, row):
        return ItemRepository(self._session), Item.category_id == row.id, "referenced by {count} items"


class PaymentMethodService(_LookupService):
    entity = "Payment Method"
    repo_class = PaymentMethodRepository

    async def _references(self, row):
        # Payments record the method by name, not by id
        return (
            PaymentRepository(self._session),
            ClientPayment.payment_method == row.name,
            "used in {count} payments",
        )
