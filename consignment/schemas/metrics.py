"""Read-only metrics response models."""

from __future__ import annotations

from consignment.schemas.common import CamelModel


class PaymentMetrics(CamelModel):
    total_payments_received: int
    total_payments_amount: float
    overdue_payments: int
    upcoming_payments: int
    average_payment_amount: float
    monthly_payment_trend: float


class PaymentMethodBreakdown(CamelModel):
    payment_method: str
    total_amount: float
    transaction_count: int
    percentage: float
    avg_transaction_amount: float


class PayoutMetrics(CamelModel):
    total_payouts_paid: int
    total_payouts_amount: float
    pending_payouts: int
    upcoming_payouts: int
    average_payout_amount: float
    monthly_payout_trend: float
