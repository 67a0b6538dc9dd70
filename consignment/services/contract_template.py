"""Contract template service — reusable contract terms with a single default template."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.exceptions import ConflictError, NotFoundError
from consignment.db.base import atomic
from consignment.domain.contract import Contract, ContractTemplate
from consignment.repositories.contract import ContractRepository, ContractTemplateRepository
from consignment.schemas.contract import ContractTemplateCreate, ContractTemplateUpdate

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "Contrato Estándar de Consignación"

DEFAULT_TEMPLATE_TERMS = """CONTRATO DE CONSIGNACIÓN

Entre {vendor_name}, con RUT {vendor_tax_id}, en adelante el "CONSIGNANTE",
y el CONSIGNATARIO, se acuerda la consignación de los siguientes artículos:

{items_table}

PRIMERO: PRECIO Y CONDICIONES
- Precio mínimo de venta: {min_price}
- Precio máximo de venta: {max_price}
- Comisión del consignatario: {commission_percentage}%
- Plazo de consignación: {consignment_days} días

SEGUNDO: LIQUIDACIÓN
El CONSIGNATARIO liquidará al CONSIGNANTE dentro de {payment_days} días hábiles posteriores a la venta.

Fecha: {contract_date}
"""

class ContractTemplateService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._repo = ContractTemplateRepository(session)
        self._contracts = ContractRepository(session)

    async def list_templates(self) -> list[ContractTemplate]:
        return await self._repo.list()

    async def get_template(self, template_id: str) -> ContractTemplate:
        template = await self._repo.get_by_id(template_id)
        if not template:
            raise NotFoundError("Contract Template", template_id)
        return template

    async def create_template(self, data: ContractTemplateCreate) -> ContractTemplate:
        async with atomic(self._session):
            template = await self._repo.create(**data.model_dump())
            if template.is_default:
                await self._repo.clear_default_except(template.id)
        logger.info("Created contract template %s (default=%s)", template.id, template.is_default)
        return template

    async def update_template(self, template_id: str, data: ContractTemplateUpdate) -> ContractTemplate:
        _ = await self.get_template(template_id)
        changes = data.changes()
        for field in ("name", "terms_text", "is_default"):
            if field in changes and changes[field] is None:
                changes.pop(field)
        async with atomic(self._session):
            updated = await self._repo.update(template_id, **changes)
            if changes.get("is_default") is True:
                await self._repo.clear_default_except(template_id)
        return updated  # type: ignore[return-value]

    async def delete_template(self, template_id: str) -> None:
        template = await self.get_template(template_id)
        if template.is_default:
            raise ConflictError("Cannot delete the default template")

        count = await self._contracts.count_where(Contract.template_id == template_id)
        if count > 0:
            logger.warning("Refused to delete contract template %s: %d contracts", template_id, count)
            raise ConflictError(f"Cannot delete template: has {count} contracts")

        await self._repo.delete(template_id)
        logger.info("Deleted contract template %s", template_id)

    async def get_default_template(self) -> ContractTemplate | None:
        return await self._repo.get_default()

    async def ensure_default_template(self) -> ContractTemplate:
        """Return the default template, creating the stock one on first use."""
        existing = await self.get_default_template()
        if existing:
            return existing
        return await self.create_template(
            ContractTemplateCreate(
                name=DEFAULT_TEMPLATE_NAME,
                terms_text=DEFAULT_TEMPLATE_TERMS,
                is_default=True,
            )
        )

    async def set_default_template(self, template_id: str) -> ContractTemplate:
        _ = await self.get_template(template_id)
        async with atomic(self._session):
            await self._repo.clear_default_except(template_id)
            updated = await self._repo.update(template_id, is_default=True)
        return updated  # type: ignore[return-value]
