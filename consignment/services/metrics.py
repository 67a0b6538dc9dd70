"""Metrics service — read-only payment and payout aggregates for the dashboard."""


from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.config import settings
from consignment.core.filters import date_range
from consignment.domain.payment import ClientPayment, InstallmentPlan, VendorPayout
from consignment.repositories.payment import InstallmentRepository, PaymentRepository, PayoutRepository
from consignment.schemas.metrics import PaymentMethodBreakdown, PaymentMetrics, PayoutMetrics


def compute_trend(current: float, previous: float) -> float:
    """Percentage change from *previous* to *current*; 0 when there is nothing to compare against."""
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


class MetricsService:
    def __init__(self, session: AsyncSession):
        self._payments = PaymentRepository(session)
        self._installments = InstallmentRepository(session)
        self._payouts = PayoutRepository(session)

    async def get_payment_metrics(self, now: datetime | None = None) -> PaymentMetrics:
        now = now or datetime.now(timezone.utc)
        today: date = now.date()

        count, total, average = await self._payments.totals()

        overdue = await self._installments.count_pending(InstallmentPlan.due_date <= today)
        upcoming = await self._installments.count_pending(
            InstallmentPlan.due_date >= today,
            InstallmentPlan.due_date <= today + timedelta(days=settings.upcoming_window_days),
        )

        # Two back-to-back rolling windows ending now
        window = timedelta(days=settings.trend_window_days)
        current = await self._payments.sum_amount(ClientPayment.paid_at >= now - window)
        previous = await self._payments.sum_amount(
            ClientPayment.paid_at >= now - 2 * window,
            ClientPayment.paid_at <= now - window,
        )

        return PaymentMetrics(
            total_payments_received=count,
            total_payments_amount=float(total),
            overdue_payments=overdue,
            upcoming_payments=upcoming,
            average_payment_amount=float(average),
            monthly_payment_trend=compute_trend(float(current), float(previous)),
        )

    async def get_payment_method_breakdown(
        self, start_date=None, end_date=None
    ) -> list[PaymentMethodBreakdown]:
        """Totals per payment method with each method's share of the grand total."""
        rows = await self._payments.totals_by_method(
            *date_range(ClientPayment.paid_at, start_date, end_date)
        )
        grand_total = sum(float(row.total_amount) for row in rows)
        return [
            PaymentMethodBreakdown(
                payment_method=row.payment_method,
                total_amount=float(row.total_amount),
                transaction_count=int(row.transaction_count),
                percentage=float(row.total_amount) / grand_total * 100 if grand_total > 0 else 0.0,
                avg_transaction_amount=float(row.avg_amount or 0),
            )
            for row in rows
        ]

    async def get_payout_metrics(self, now: datetime | None = None) -> PayoutMetrics:
        """Vendor payout totals.

        A sold item is pending until its vendor has received
        ``settings.payout_pending_share`` of what clients paid for it.
        """
        now = now or datetime.now(timezone.utc)

        count, total, average = await self._payouts.totals()

        share = settings.payout_pending_share
        rows = await self._payouts.sold_item_summaries()
        pending = sum(
            1 for row in rows if Decimal(str(row.total_paid)) < Decimal(str(row.sale_price)) * share
        )

        window = timedelta(days=settings.trend_window_days)
        current = await self._payouts.sum_amount(VendorPayout.paid_at >= now - window)
        previous = await self._payouts.sum_amount(
            VendorPayout.paid_at >= now - 2 * window,
            VendorPayout.paid_at <= now - window,
        )

        return PayoutMetrics(
            total_payouts_paid=count,
            total_payouts_amount=float(total),
            pending_payouts=pending,
            # No separate schedule exists for payouts; upcoming mirrors pending
            upcoming_payouts=pending,
            average_payout_amount=float(average),
            monthly_payout_trend=compute_trend(float(current), float(previous)),
        )
