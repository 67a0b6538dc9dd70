"""Contract and contract-template router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.contract import (
    ContractCreate,
    ContractOut,
    ContractTemplateCreate,
    ContractTemplateOut,
    ContractTemplateUpdate,
    ContractUpdate,
    ContractWithRelationsOut,
)
from consignment.services.contract import ContractService
from consignment.services.contract_template import ContractTemplateService

router = APIRouter(tags=["Contracts"])


# ------------------------------------------------------------------
# Templates
# ------------------------------------------------------------------

@router.get("/contract-templates", response_model=DataResponse[list[ContractTemplateOut]])
async def list_templates(session: AsyncSession = Depends(get_db)):
    templates = await ContractTemplateService(session).list_templates()
    return {"data": [ContractTemplateOut.model_validate(t) for t in templates]}


@router.get("/contract-templates/default", response_model=DataResponse[ContractTemplateOut])
async def default_template(session: AsyncSession = Depends(get_db)):
    """Return the default template, creating the stock one if none exists yet."""
    template = await ContractTemplateService(session).ensure_default_template()
    return {"data": ContractTemplateOut.model_validate(template)}


@router.post(
    "/contract-templates",
    response_model=DataResponse[ContractTemplateOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_template(body: ContractTemplateCreate, session: AsyncSession = Depends(get_db)):
    template = await ContractTemplateService(session).create_template(body)
    return {"data": ContractTemplateOut.model_validate(template)}


@router.patch("/contract-templates/{template_id}", response_model=DataResponse[ContractTemplateOut])
async def update_template(
    template_id: str, body: ContractTemplateUpdate, session: AsyncSession = Depends(get_db)
):
    template = await ContractTemplateService(session).update_template(template_id, body)
    return {"data": ContractTemplateOut.model_validate(template)}


@router.post("/contract-templates/{template_id}/default", response_model=DataResponse[ContractTemplateOut])
async def set_default_template(template_id: str, session: AsyncSession = Depends(get_db)):
    template = await ContractTemplateService(session).set_default_template(template_id)
    return {"data": ContractTemplateOut.model_validate(template)}


@router.delete("/contract-templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, session: AsyncSession = Depends(get_db)):
    await ContractTemplateService(session).delete_template(template_id)


# ------------------------------------------------------------------
# Contracts
# ------------------------------------------------------------------

@router.get("/contracts", response_model=DataResponse[list[ContractWithRelationsOut]])
async def list_contracts(session: AsyncSession = Depends(get_db)):
    return {"data": await ContractService(session).list_contracts()}


@router.post("/contracts", response_model=DataResponse[ContractOut], status_code=status.HTTP_201_CREATED)
async def create_contract(body: ContractCreate, session: AsyncSession = Depends(get_db)):
    contract = await ContractService(session).create_contract(body)
    return {"data": ContractOut.model_validate(contract)}


@router.get("/contracts/{contract_id}", response_model=DataResponse[ContractWithRelationsOut])
async def get_contract(contract_id: str, session: AsyncSession = Depends(get_db)):
    return {"data": await ContractService(session).get_contract(contract_id)}


@router.patch("/contracts/{contract_id}", response_model=DataResponse[ContractOut])
async def update_contract(contract_id: str, body: ContractUpdate, session: AsyncSession = Depends(get_db)):
    contract = await ContractService(session).update_contract(contract_id, body)
    return {"data": ContractOut.model_validate(contract)}


@router.delete("/contracts/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(contract_id: str, session: AsyncSession = Depends(get_db)):
    await ContractService(session).delete_contract(contract_id)
