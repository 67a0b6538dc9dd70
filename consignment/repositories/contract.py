"""Contract and ContractTemplate repositories."""

from __future__ import annotations

from sqlalchemy import ColumnElement

from consignment.core.joins import contract_with_relations
from consignment.domain.contract import Contract, ContractTemplate
from consignment.domain.vendor import Vendor
from consignment.repositories.base import BaseRepository


class ContractRepository(BaseRepository[Contract]):
    model = Contract

    async def list_with_relations(
        self, *conditions: ColumnElement[bool]
    ) -> list[tuple[Contract, Vendor, ContractTemplate | None]]:
        q = contract_with_relations().order_by(Contract.created_at.desc())
        if conditions:
            q = q.where(*conditions)
        return [tuple(row) for row in (await self._session.execute(q)).all()]

    async def get_with_relations(
        self, contract_id: str
    ) -> tuple[Contract, Vendor, ContractTemplate | None] | None:
        rows = await self.list_with_relations(Contract.id == contract_id)
        return rows[0] if rows else None


class ContractTemplateRepository(BaseRepository[ContractTemplate]):
    model = ContractTemplate

    async def get_default(self) -> ContractTemplate | None:
        rows = await self.list(ContractTemplate.is_default.is_(True), limit=1)
        return rows[0] if rows else None

    async def clear_default_except(self, template_id: str) -> int:
        return await self.update_where(
            ContractTemplate.id != template_id,
            ContractTemplate.is_default.is_(True),
            is_default=False,
        )
