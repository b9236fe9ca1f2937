"""Fixtures for service and API integration tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from commission_engine.api.app import create_app
from commission_engine.api.dependencies import get_db_session
from commission_engine.models import (
    ClosingArrPayoutDetail,
    ClosingArrRenewalMultiplier,
    CompPlan,
    Employee,
    MonthlyPayout,
    PayoutMetricDetail,
    PayoutRun,
)


@dataclass
class SeededData:
    """Identifiers of the seeded fixture rows."""

    plan_id: UUID
    payout_run_id: UUID
    empty_run_id: UUID
    priya_id: UUID
    aaron_id: UUID
    departed_id: UUID  # referenced by details, missing from employees


@pytest.fixture
async def seeded_db(session: AsyncSession) -> SeededData:
    """Seed employees, a plan with tiers, one populated and one empty run."""
    priya = Employee(employee_code="EMP001", full_name="Priya Nair", local_currency="INR")
    aaron = Employee(employee_code="EMP002", full_name="Aaron Cole", local_currency="USD")
    plan = CompPlan(name="Hunter FY25", effective_year=2025)
    run = PayoutRun(month_year=date(2025, 3, 1), run_status="review")
    empty_run = PayoutRun(month_year=date(2025, 4, 1), run_status="draft")
    session.add_all([priya, aaron, plan, run, empty_run])
    await session.flush()

    session.add_all(
        [
            ClosingArrRenewalMultiplier(plan_id=plan.id, min_years=0, max_years=None, multiplier_value=Decimal("1.0")),
            ClosingArrRenewalMultiplier(plan_id=plan.id, min_years=3, max_years=None, multiplier_value=Decimal("1.2")),
        ]
    )

    departed_id = uuid4()
    session.add_all(
        [
            PayoutMetricDetail(
                payout_run_id=run.id,
                employee_id=priya.id,
                component_type="variable_pay",
                metric_name="New Software Booking ARR",
                plan_name="Hunter FY25",
                target_bonus_usd=Decimal("20000"),
                ytd_eligible_usd=Decimal("6000"),
                booking_usd=Decimal("4200"),
                collection_usd=Decimal("1500"),
                year_end_usd=Decimal("300"),
            ),
            PayoutMetricDetail(
                payout_run_id=run.id,
                employee_id=priya.id,
                component_type="commission",
                metric_name="Perpetual License",
                plan_name="Hunter FY25",
                target_bonus_usd=Decimal("20000"),
                ytd_eligible_usd=Decimal("2500"),
            ),
            PayoutMetricDetail(
                payout_run_id=run.id,
                employee_id=aaron.id,
                component_type="nrr",
                metric_name="NRR Additional Pay",
                plan_name="Farmer FY25",
                target_bonus_usd=Decimal("12000"),
                ytd_eligible_usd=Decimal("900"),
            ),
            PayoutMetricDetail(
                payout_run_id=run.id,
                employee_id=departed_id,
                component_type="variable_pay",
                metric_name="New Software Booking ARR",
                ytd_eligible_usd=Decimal("100"),
            ),
        ]
    )

    session.add_all(
        [
            ClosingArrPayoutDetail(
                payout_run_id=run.id,
                employee_id="EMP001",
                pid="PID-100",
                customer_name="Northwind Bank",
                renewal_years=3,
                is_multi_year=True,
                closing_arr_usd=Decimal("50000"),
                multiplier=Decimal("1.2"),
                adjusted_arr_usd=Decimal("60000"),
            ),
            ClosingArrPayoutDetail(
                payout_run_id=run.id,
                employee_id="EMP404",
                pid="PID-404",
                customer_name="Contoso Insurance",
                closing_arr_usd=Decimal("10000"),
                adjusted_arr_usd=Decimal("10000"),
                is_eligible=False,
                exclusion_reason="Employee departed before payout",
            ),
        ]
    )

    session.add_all(
        [
            MonthlyPayout(employee_id=priya.id, month_year=date(2025, 1, 1), payout_type="Variable Pay",
                          calculated_amount_usd=Decimal("3000"), booking_amount_usd=Decimal("2100"),
                          collection_amount_usd=Decimal("750"), year_end_amount_usd=Decimal("150")),
            MonthlyPayout(employee_id=priya.id, month_year=date(2025, 2, 1), payout_type="Perpetual License",
                          calculated_amount_usd=Decimal("2500"), booking_amount_usd=Decimal("2500")),
            MonthlyPayout(employee_id=priya.id, month_year=date(2025, 3, 1), payout_type="Collection Release",
                          calculated_amount_usd=Decimal("750"), booking_amount_usd=Decimal("750")),
            MonthlyPayout(employee_id=priya.id, month_year=date(2025, 3, 1), payout_type="Clawback",
                          calculated_amount_usd=Decimal("-400")),
            MonthlyPayout(employee_id=priya.id, month_year=date(2024, 12, 1), payout_type="Variable Pay",
                          calculated_amount_usd=Decimal("9999")),
            MonthlyPayout(employee_id=aaron.id, month_year=date(2025, 1, 1), payout_type="Variable Pay",
                          calculated_amount_usd=Decimal("1234")),
        ]
    )
    await session.flush()

    return SeededData(
        plan_id=plan.id,
        payout_run_id=run.id,
        empty_run_id=empty_run.id,
        priya_id=priya.id,
        aaron_id=aaron.id,
        departed_id=departed_id,
    )


@pytest.fixture
async def client(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test session."""
    app = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_db_session] = _override_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
