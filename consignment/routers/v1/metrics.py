"""Read-only metrics router."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.response import DataResponse
from consignment.db.base import get_db
from consignment.schemas.metrics import PaymentMethodBreakdown, PaymentMetrics, PayoutMetrics
from consignment.services.metrics import MetricsService

router = APIRouter(prefix="/metrics", tags=["Metrics"])


@router.get("/payments", response_model=DataResponse[PaymentMetrics])
async def payment_metrics(session: AsyncSession = Depends(get_db)):
    return {"data": await MetricsService(session).get_payment_metrics()}


@router.get("/payouts", response_model=DataResponse[PayoutMetrics])
async def payout_metrics(session: AsyncSession = Depends(get_db)):
    return {"data": await MetricsService(session).get_payout_metrics()}


@router.get("/payment-methods", response_model=DataResponse[list[PaymentMethodBreakdown]])
async def payment_method_breakdown(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    session: AsyncSession = Depends(get_db),
):
    breakdown = await MetricsService(session).get_payment_method_breakdown(start_date, end_date)
    return {"data": breakdown}
