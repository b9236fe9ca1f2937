"""Integration tests for the data access services."""

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select

from commission_engine.calculators.enrichment import JoinKey
from commission_engine.calculators.summary import DashboardSummaryAggregator
from commission_engine.calculators.types import ClosingArrPayoutDetailRow, PayoutBucket
from commission_engine.models import PayoutMetricDetail
from commission_engine.services import (
    DashboardSummaryService,
    PayoutWorkingsService,
    RenewalMultiplierService,
    TwoPhaseFetch,
)

pytestmark = pytest.mark.asyncio


class TestPayoutWorkingsService:
    """Test employee and closing ARR workings loading."""

    async def test_employee_workings(self, session, seeded_db):
        service = PayoutWorkingsService(session, default_currency="USD")

        workings = await service.employee_workings(seeded_db.payout_run_id)

        assert [w.employee_name for w in workings] == ["Aaron Cole", "Priya Nair", "Unknown"]

        aaron, priya, departed = workings
        assert priya.employee_code == "EMP001"
        assert priya.local_currency == "INR"
        assert [d.metric_name for d in priya.vp_details] == ["New Software Booking ARR"]
        assert [d.metric_name for d in priya.commission_details] == ["Perpetual License"]
        assert priya.totals_for(PayoutBucket.VARIABLE_PAY).holding_usd == Decimal("1800")
        assert priya.eligible_total.ytd_eligible_usd == Decimal("8500")

        assert [d.metric_name for d in aaron.other_details] == ["NRR Additional Pay"]
        assert aaron.plan_name == "Farmer FY25"

        assert departed.employee_code == str(seeded_db.departed_id)
        assert len(departed.all_details) == 1

    async def test_employee_workings_empty_run(self, session, seeded_db):
        service = PayoutWorkingsService(session, default_currency="USD")

        assert await service.employee_workings(seeded_db.empty_run_id) == []

    async def test_closing_arr_workings(self, session, seeded_db):
        service = PayoutWorkingsService(session, default_currency="USD")

        rows = await service.closing_arr_workings(seeded_db.payout_run_id)

        assert [r.pid for r in rows] == ["PID-100", "PID-404"]
        assert rows[0].employee_name == "Priya Nair"
        assert rows[0].period is None
        assert rows[1].employee_name == "Unknown"
        assert rows[1].employee_code == "EMP404"
        assert rows[1].exclusion_reason == "Employee departed before payout"

    async def test_get_payout_run(self, session, seeded_db):
        service = PayoutWorkingsService(session, default_currency="USD")

        assert (await service.get_payout_run(seeded_db.payout_run_id)) is not None
        assert (await service.get_payout_run(uuid4())) is None


class TestTwoPhaseFetch:
    """Test the dependent read pipeline."""

    async def test_short_circuit_on_empty_primary(self, session, seeded_db):
        fetch = TwoPhaseFetch(
            session,
            JoinKey.ID,
            to_row=lambda obj: obj.to_row(),
            identifier=lambda row: row.employee_id,
        )

        result = await fetch.run(
            select(PayoutMetricDetail).where(PayoutMetricDetail.payout_run_id == seeded_db.empty_run_id)
        )

        assert result.short_circuited is True
        assert result.rows == []
        assert result.references == []

    async def test_references_for_distinct_ids(self, session, seeded_db):
        fetch = TwoPhaseFetch(
            session,
            JoinKey.ID,
            to_row=lambda obj: obj.to_row(),
            identifier=lambda row: row.employee_id,
        )

        result = await fetch.run(
            select(PayoutMetricDetail).where(PayoutMetricDetail.payout_run_id == seeded_db.payout_run_id)
        )

        assert result.short_circuited is False
        assert len(result.rows) == 4
        assert {r.display_name for r in result.references} == {"Priya Nair", "Aaron Cole"}
        assert set(result.references_by_key()) == {str(seeded_db.priya_id), str(seeded_db.aaron_id)}


class TestDashboardSummaryService:
    """Test fiscal-year dashboard summaries."""

    async def test_summary_for_employee(self, session, seeded_db):
        summary = await DashboardSummaryService(session).summary_for("EMP001", 2025)

        assert summary.is_from_payout_run is True
        assert summary.total_variable_pay == Decimal("3000")
        assert summary.total_commission == Decimal("2500")
        assert summary.total_eligible == Decimal("5500")
        assert summary.total_paid == Decimal("4600")
        assert summary.total_holding == Decimal("900")
        assert summary.total_clawback == Decimal("400")
        assert summary.months_covered == 2

    async def test_summary_without_payouts(self, session, seeded_db):
        summary = await DashboardSummaryService(session).summary_for("EMP001", 2023)

        assert summary.is_from_payout_run is False
        assert summary.months_covered == 0
        assert summary.total_eligible == 0

    async def test_summary_for_unknown_code(self, session, seeded_db):
        summary = await DashboardSummaryService(session).summary_for("EMP999", 2025)

        assert summary == DashboardSummaryAggregator.empty()
        assert summary.is_from_payout_run is False

    async def test_summary_excludes_other_employees(self, session, seeded_db):
        summary = await DashboardSummaryService(session).summary_for("EMP002", 2025)

        assert summary.total_variable_pay == Decimal("1234")
        assert summary.months_covered == 1


class TestRenewalMultiplierService:
    """Test tier loading and resolution."""

    async def test_tiers_for_plan(self, session, seeded_db):
        tiers = await RenewalMultiplierService(session).tiers_for(seeded_db.plan_id)

        assert [t.min_years for t in tiers] == [0, 3]

    async def test_resolve(self, session, seeded_db):
        service = RenewalMultiplierService(session)

        assert await service.resolve(seeded_db.plan_id, 5) == Decimal("1.2")
        assert await service.resolve(seeded_db.plan_id, 1) == Decimal("1.0")
        assert await service.resolve(uuid4(), 5) == Decimal("1.0")

    async def test_adjust_closing_arr(self, session, seeded_db):
        row = ClosingArrPayoutDetailRow(
            payout_run_id="preview",
            employee_id="EMP001",
            pid="PID-NEW",
            renewal_years=4,
            is_multi_year=True,
            closing_arr_usd=Decimal("10000"),
        )

        [adjusted] = await RenewalMultiplierService(session).adjust_closing_arr(seeded_db.plan_id, [row])

        assert adjusted.multiplier == Decimal("1.2")
        assert adjusted.adjusted_arr_usd == Decimal("12000")

    async def test_adjust_closing_arr_single_year(self, session, seeded_db):
        row = ClosingArrPayoutDetailRow(
            payout_run_id="preview",
            employee_id="EMP001",
            pid="PID-ONE",
            renewal_years=4,
            is_multi_year=False,
            closing_arr_usd=Decimal("10000"),
        )

        [adjusted] = await RenewalMultiplierService(session).adjust_closing_arr(seeded_db.plan_id, [row])

        assert adjusted.multiplier == Decimal("1.0")
        assert adjusted.adjusted_arr_usd == Decimal("10000")
