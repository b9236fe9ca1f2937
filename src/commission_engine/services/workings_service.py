"""Payout run workings, dashboard summary and renewal multiplier services."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_engine.calculators.enrichment import JoinKey, enrich
from commission_engine.calculators.multiplier_resolver import RenewalMultiplierResolver
from commission_engine.calculators.summary import DashboardSummaryAggregator
from commission_engine.calculators.types import (
    ClosingArrPayoutDetailRow,
    DashboardPayoutSummary,
    EmployeeWorkings,
    MonthlyPayoutRecord,
    PayoutDetailRow,
    RenewalMultiplierTier,
)
from commission_engine.calculators.workings import EmployeeAggregationEngine
from commission_engine.config import get_settings
from commission_engine.models import (
    ClosingArrPayoutDetail,
    ClosingArrRenewalMultiplier,
    Employee,
    MonthlyPayout,
    PayoutMetricDetail,
    PayoutRun,
)
from commission_engine.services.fetch_pipeline import TwoPhaseFetch

logger = logging.getLogger(__name__)


class PayoutWorkingsService:
    """Builds the payout run review views.

    Operations:
    - employee_workings: metric detail rows grouped per employee
    - closing_arr_workings: project-level closing ARR rows with display names
    """

    def __init__(self, session: AsyncSession, default_currency: str | None = None):
        self.session = session
        self.default_currency = default_currency or get_settings().default_currency

    async def get_payout_run(self, payout_run_id: UUID) -> PayoutRun | None:
        result = await self.session.execute(
            select(PayoutRun).where(PayoutRun.id == payout_run_id)
        )
        return result.scalar_one_or_none()

    async def employee_workings(self, payout_run_id: UUID) -> list[EmployeeWorkings]:
        """Group a run's metric details by employee, sorted by name."""
        fetch: TwoPhaseFetch[PayoutDetailRow] = TwoPhaseFetch(
            self.session,
            JoinKey.ID,
            to_row=lambda obj: obj.to_row(),
            identifier=lambda row: row.employee_id,
        )
        result = await fetch.run(
            select(PayoutMetricDetail)
            .where(PayoutMetricDetail.payout_run_id == payout_run_id)
            .order_by(PayoutMetricDetail.employee_id, PayoutMetricDetail.component_type)
        )
        if result.short_circuited:
            return []

        engine = EmployeeAggregationEngine(self.default_currency)
        return engine.group(result.rows, result.references_by_key())

    async def closing_arr_workings(self, payout_run_id: UUID) -> list[ClosingArrPayoutDetailRow]:
        """Load a run's closing ARR rows joined to employees by code."""
        fetch: TwoPhaseFetch[ClosingArrPayoutDetailRow] = TwoPhaseFetch(
            self.session,
            JoinKey.CODE,
            to_row=lambda obj: obj.to_row(),
            identifier=lambda row: row.employee_id,
        )
        result = await fetch.run(
            select(ClosingArrPayoutDetail)
            .where(ClosingArrPayoutDetail.payout_run_id == payout_run_id)
            .order_by(ClosingArrPayoutDetail.employee_id, ClosingArrPayoutDetail.pid)
        )
        if result.short_circuited:
            return []

        return enrich(result.rows, result.references, JoinKey.CODE, self.default_currency)


class DashboardSummaryService:
    """Summarizes an employee's payout run results for a fiscal year.

    Stages (stable order):
    1) Resolve the employee code to the employee row id
    2) Early exit with the fallback summary when the code is unknown
    3) Load the fiscal year's monthly payouts for that id and summarize
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def summary_for(self, employee_code: str, fiscal_year: int) -> DashboardPayoutSummary:
        """Summarize monthly payouts for an employee code and fiscal year.

        Returns the fallback summary (is_from_payout_run=False) when the
        code matches no employee or the employee has no payout rows in
        the year.
        """
        employee_id = await self._resolve_employee_id(employee_code)
        if employee_id is None:
            logger.debug("Unknown employee code %s, returning fallback summary", employee_code)
            return DashboardSummaryAggregator.empty()

        records = await self._load_payouts(employee_id, fiscal_year)
        return DashboardSummaryAggregator.summarize(records)

    async def _resolve_employee_id(self, employee_code: str) -> UUID | None:
        result = await self.session.execute(
            select(Employee.id).where(Employee.employee_code == employee_code)
        )
        return result.scalar_one_or_none()

    async def _load_payouts(self, employee_id: UUID, fiscal_year: int) -> list[MonthlyPayoutRecord]:
        result = await self.session.execute(
            select(MonthlyPayout).where(
                MonthlyPayout.employee_id == employee_id,
                MonthlyPayout.month_year >= date(fiscal_year, 1, 1),
                MonthlyPayout.month_year <= date(fiscal_year, 12, 31),
            )
        )
        return [payout.to_record() for payout in result.scalars().all()]


class RenewalMultiplierService:
    """Loads a plan's renewal multiplier tiers and resolves against them."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def tiers_for(self, plan_id: UUID) -> list[RenewalMultiplierTier]:
        result = await self.session.execute(
            select(ClosingArrRenewalMultiplier)
            .where(ClosingArrRenewalMultiplier.plan_id == plan_id)
            .order_by(ClosingArrRenewalMultiplier.min_years)
        )
        return [tier.to_tier() for tier in result.scalars().all()]

    async def resolve(self, plan_id: UUID, renewal_years: int) -> Decimal:
        tiers = await self.tiers_for(plan_id)
        return RenewalMultiplierResolver.resolve(tiers, renewal_years)

    async def adjust_closing_arr(
        self,
        plan_id: UUID,
        rows: Iterable[ClosingArrPayoutDetailRow],
    ) -> list[ClosingArrPayoutDetailRow]:
        """Apply the plan's multipliers to closing ARR rows."""
        tiers = await self.tiers_for(plan_id)
        return [RenewalMultiplierResolver.apply_to_closing_arr(row, tiers) for row in rows]
