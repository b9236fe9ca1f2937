"""Payout run result models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from commission_engine.calculators.types import (
    ZERO,
    ClosingArrPayoutDetailRow,
    ComponentType,
    MonthlyPayoutRecord,
    PayoutDetailRow,
)
from commission_engine.models.base import Base, TimestampMixin


class PayoutRun(Base, TimestampMixin):
    """A monthly payout run."""

    __tablename__ = "payout_runs"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    month_year: Mapped[date] = mapped_column(Date, unique=True, nullable=False)
    run_status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class PayoutMetricDetail(Base, TimestampMixin):
    """Per-metric payout working line for an employee in a run."""

    __tablename__ = "payout_metric_details"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payout_run_id: Mapped[UUID] = mapped_column(
        ForeignKey("payout_runs.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id: Mapped[UUID] = mapped_column(ForeignKey("employees.id"), nullable=False)
    component_type: Mapped[str] = mapped_column(String, nullable=False)
    metric_name: Mapped[str] = mapped_column(String, nullable=False)
    plan_id: Mapped[UUID | None] = mapped_column(ForeignKey("comp_plans.id"), nullable=True)
    plan_name: Mapped[str | None] = mapped_column(String, nullable=True)
    target_bonus_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    allocated_ote_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    target_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    actual_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    achievement_pct: Mapped[Decimal | None] = mapped_column(default=ZERO)
    multiplier: Mapped[Decimal | None] = mapped_column(default=ZERO)
    ytd_eligible_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    prior_paid_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    this_month_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    booking_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    collection_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    year_end_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    commission_rate_pct: Mapped[Decimal | None] = mapped_column(nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_row(self) -> PayoutDetailRow:
        return PayoutDetailRow(
            payout_run_id=str(self.payout_run_id),
            employee_id=str(self.employee_id),
            component_type=ComponentType(self.component_type),
            metric_name=self.metric_name,
            plan_id=str(self.plan_id) if self.plan_id else None,
            plan_name=self.plan_name,
            target_bonus_usd=self.target_bonus_usd or ZERO,
            allocated_ote_usd=self.allocated_ote_usd or ZERO,
            target_usd=self.target_usd or ZERO,
            actual_usd=self.actual_usd or ZERO,
            achievement_pct=self.achievement_pct or ZERO,
            multiplier=self.multiplier or ZERO,
            ytd_eligible_usd=self.ytd_eligible_usd or ZERO,
            prior_paid_usd=self.prior_paid_usd or ZERO,
            this_month_usd=self.this_month_usd or ZERO,
            booking_usd=self.booking_usd or ZERO,
            collection_usd=self.collection_usd or ZERO,
            year_end_usd=self.year_end_usd or ZERO,
            commission_rate_pct=self.commission_rate_pct,
            notes=self.notes,
            detail_id=str(self.id),
        )


class ClosingArrPayoutDetail(Base, TimestampMixin):
    """Project-level closing ARR working line.

    ``employee_id`` holds the employee code, not the employee row id.
    """

    __tablename__ = "closing_arr_payout_details"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payout_run_id: Mapped[UUID] = mapped_column(
        ForeignKey("payout_runs.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id: Mapped[str] = mapped_column(String, nullable=False)
    pid: Mapped[str] = mapped_column(String, nullable=False)
    customer_name: Mapped[str | None] = mapped_column(String, nullable=True)
    customer_code: Mapped[str | None] = mapped_column(String, nullable=True)
    bu: Mapped[str | None] = mapped_column(String, nullable=True)
    product: Mapped[str | None] = mapped_column(String, nullable=True)
    month_year: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_multi_year: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    renewal_years: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    closing_arr_usd: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    multiplier: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("1.0"))
    adjusted_arr_usd: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    is_eligible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    exclusion_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_category_2: Mapped[str | None] = mapped_column(String, nullable=True)

    def to_row(self) -> ClosingArrPayoutDetailRow:
        return ClosingArrPayoutDetailRow(
            payout_run_id=str(self.payout_run_id),
            employee_id=self.employee_id,
            pid=self.pid,
            renewal_years=self.renewal_years,
            closing_arr_usd=self.closing_arr_usd,
            multiplier=self.multiplier,
            adjusted_arr_usd=self.adjusted_arr_usd,
            is_eligible=self.is_eligible,
            exclusion_reason=self.exclusion_reason,
            is_multi_year=self.is_multi_year,
            customer_name=self.customer_name,
            customer_code=self.customer_code,
            bu=self.bu,
            product=self.product,
            period=self.month_year.strftime("%Y-%m") if self.month_year else None,
            end_date=self.end_date,
            order_category=self.order_category_2,
            detail_id=str(self.id),
        )


class MonthlyPayout(Base, TimestampMixin):
    """Monthly payout result per employee and payout type."""

    __tablename__ = "monthly_payouts"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(ForeignKey("employees.id"), nullable=False)
    month_year: Mapped[date] = mapped_column(Date, nullable=False)
    payout_type: Mapped[str] = mapped_column(String, nullable=False)
    payout_run_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("payout_runs.id"), nullable=True
    )
    calculated_amount_usd: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)
    booking_amount_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    collection_amount_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    year_end_amount_usd: Mapped[Decimal | None] = mapped_column(default=ZERO)
    status: Mapped[str] = mapped_column(String, nullable=False, default="calculated")

    def to_record(self) -> MonthlyPayoutRecord:
        return MonthlyPayoutRecord(
            employee_id=str(self.employee_id),
            period=self.month_year.strftime("%Y-%m"),
            payout_type=self.payout_type,
            calculated_amount_usd=self.calculated_amount_usd or ZERO,
            booking_amount_usd=self.booking_amount_usd or ZERO,
            collection_amount_usd=self.collection_amount_usd or ZERO,
            year_end_amount_usd=self.year_end_amount_usd or ZERO,
        )
