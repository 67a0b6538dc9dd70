"""Client payments, vendor payouts, installment plans and clients."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.filters import CommonFilters
from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.payment import (
    InstallmentCreate,
    InstallmentOut,
    InstallmentPaymentIn,
    InstallmentUpdate,
    InstallmentWithRelationsOut,
    PaymentCreate,
    PaymentOut,
    PaymentUpdate,
    PaymentWithRelationsOut,
    PayoutCreate,
    PayoutOut,
    PayoutWithRelationsOut,
    UpcomingPayoutOut,
)
from consignment.schemas.vendor import ClientCreate, ClientOut, ClientUpdate
from consignment.services.payment import PaymentService

router = APIRouter(tags=["Payments"])


@router.get("/clients", response_model=DataResponse[list[ClientOut]])
async def list_clients(session: AsyncSession = Depends(get_db)):
    clients = await PaymentService(session).list_clients()
    return {"data": [ClientOut.model_validate(c) for c in clients]}


@router.post("/clients", response_model=DataResponse[ClientOut], status_code=status.HTTP_201_CREATED)
async def create_client(body: ClientCreate, session: AsyncSession = Depends(get_db)):
    client = await PaymentService(session).create_client(body)
    return {"data": ClientOut.model_validate(client)}


@router.get("/clients/{client_id}", response_model=DataResponse[ClientOut])
async def get_client(client_id: str, session: AsyncSession = Depends(get_db)):
    client = await PaymentService(session).get_client(client_id)
    return {"data": ClientOut.model_validate(client)}


@router.patch("/clients/{client_id}", response_model=DataResponse[ClientOut])
async def update_client(client_id: str, body: ClientUpdate, session: AsyncSession = Depends(get_db)):
    client = await PaymentService(session).update_client(client_id, body)
    return {"data": ClientOut.model_validate(client)}


@router.delete("/clients/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: str, session: AsyncSession = Depends(get_db)):
    await PaymentService(session).delete_client(client_id)


@router.get("/payments", response_model=DataResponse[list[PaymentWithRelationsOut]])
async def list_payments(
    client_id: Optional[list[str]] = Query(default=None, alias="clientId"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    session: AsyncSession = Depends(get_db),
):
    filters = CommonFilters(client_ids=client_id, start_date=start_date, end_date=end_date)
    return {"data": await PaymentService(session).list_payments(filters)}


@router.post("/payments", response_model=DataResponse[PaymentOut], status_code=status.HTTP_201_CREATED)
async def create_payment(body: PaymentCreate, session: AsyncSession = Depends(get_db)):
    payment = await PaymentService(session).create_payment(body)
    return {"data": PaymentOut.model_validate(payment)}


@router.patch("/payments/{payment_id}", response_model=DataResponse[PaymentOut])
async def update_payment(payment_id: str, body: PaymentUpdate, session: AsyncSession = Depends(get_db)):
    payment = await PaymentService(session).update_payment(payment_id, body)
    return {"data": PaymentOut.model_validate(payment)}


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(payment_id: str, session: AsyncSession = Depends(get_db)):
    await PaymentService(session).delete_payment(payment_id)


@router.get("/payouts", response_model=DataResponse[list[PayoutWithRelationsOut]])
async def list_payouts(
    limit: Optional[int] = Query(default=None, ge=1),
    session: AsyncSession = Depends(get_db),
):
    """Recorded payouts, most recent first."""
    return {"data": await PaymentService(session).list_payouts(limit)}


@router.get("/payouts/upcoming", response_model=DataResponse[list[UpcomingPayoutOut]])
async def upcoming_payouts(session: AsyncSession = Depends(get_db)):
    return {"data": await PaymentService(session).get_upcoming_payouts()}


@router.post("/payouts", response_model=DataResponse[PayoutOut], status_code=status.HTTP_201_CREATED)
async def create_payout(body: PayoutCreate, session: AsyncSession = Depends(get_db)):
    payout = await PaymentService(session).create_payout(body)
    return {"data": PayoutOut.model_validate(payout)}


@router.get("/installments", response_model=DataResponse[list[InstallmentWithRelationsOut]])
async def list_installments(
    client_id: Optional[str] = Query(default=None, alias="clientId"),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await PaymentService(session).list_installments(client_id)}


@router.post("/installments", response_model=DataResponse[InstallmentOut], status_code=status.HTTP_201_CREATED)
async def create_installment(body: InstallmentCreate, session: AsyncSession = Depends(get_db)):
    plan = await PaymentService(session).create_installment(body)
    return {"data": InstallmentOut.model_validate(plan)}


@router.get("/installments/upcoming", response_model=DataResponse[list[InstallmentWithRelationsOut]])
async def upcoming_installments(
    limit: int = Query(default=10, ge=1),
    session: AsyncSession = Depends(get_db),
):
    """Pending installments due within the reminder window, soonest first."""
    return {"data": await PaymentService(session).get_upcoming_payments(limit)}


@router.get("/installments/overdue", response_model=DataResponse[list[InstallmentWithRelationsOut]])
async def overdue_installments(session: AsyncSession = Depends(get_db)):
    return {"data": await PaymentService(session).get_overdue_payments()}


@router.get("/installments/{installment_id}", response_model=DataResponse[InstallmentWithRelationsOut])
async def get_installment(installment_id: str, session: AsyncSession = Depends(get_db)):
    return {"data": await PaymentService(session).get_installment(installment_id)}


@router.patch("/installments/{installment_id}", response_model=DataResponse[InstallmentOut])
async def update_installment(
    installment_id: str, body: InstallmentUpdate, session: AsyncSession = Depends(get_db)
):
    plan = await PaymentService(session).update_installment(installment_id, body)
    return {"data": InstallmentOut.model_validate(plan)}


@router.post("/installments/{installment_id}/pay", response_model=DataResponse[InstallmentOut])
async def pay_installment(
    installment_id: str, body: InstallmentPaymentIn, session: AsyncSession = Depends(get_db)
):
    plan = await PaymentService(session).mark_installment_paid(installment_id, body.paid_amount)
    return {"data": InstallmentOut.model_validate(plan)}


@router.delete("/installments/{installment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_installment(installment_id: str, session: AsyncSession = Depends(get_db)):
    await PaymentService(session).delete_installment(installment_id)
