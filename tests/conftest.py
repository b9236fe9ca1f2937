"""Pytest fixtures for commission engine tests."""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from commission_engine.calculators.types import (
    ComponentType,
    EmployeeReference,
    MonthlyPayoutRecord,
    PayoutDetailRow,
)
from commission_engine.models import Base

# Use in-memory SQLite for tests (with async support)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

RUN_ID = "run-2025-03"


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_detail() -> Callable[..., PayoutDetailRow]:
    """Factory for payout detail rows with sensible defaults."""

    def _make(
        employee_id: str,
        component_type: ComponentType = ComponentType.VARIABLE_PAY,
        metric_name: str = "New Software Booking ARR",
        **overrides,
    ) -> PayoutDetailRow:
        fields = {
            "payout_run_id": RUN_ID,
            "employee_id": employee_id,
            "component_type": component_type,
            "metric_name": metric_name,
            "plan_name": "Hunter FY25",
            "target_bonus_usd": Decimal("20000"),
        }
        fields.update(overrides)
        return PayoutDetailRow(**fields)

    return _make


@pytest.fixture
def make_payout() -> Callable[..., MonthlyPayoutRecord]:
    """Factory for monthly payout records."""

    def _make(
        payout_type: str,
        calculated: str = "0",
        booking: str = "0",
        collection: str = "0",
        year_end: str = "0",
        period: str = "2025-01",
        employee_id: str = "EMP001",
    ) -> MonthlyPayoutRecord:
        return MonthlyPayoutRecord(
            employee_id=employee_id,
            period=period,
            payout_type=payout_type,
            calculated_amount_usd=Decimal(calculated),
            booking_amount_usd=Decimal(booking),
            collection_amount_usd=Decimal(collection),
            year_end_amount_usd=Decimal(year_end),
        )

    return _make


@pytest.fixture
def employees_by_id() -> dict[str, EmployeeReference]:
    """Reference table keyed by internal employee id."""
    refs = [
        EmployeeReference(id="e-1", code="EMP001", display_name="Priya Nair", local_currency="INR"),
        EmployeeReference(id="e-2", code="EMP002", display_name="Aaron Cole", local_currency="USD"),
        EmployeeReference(id="e-3", code="EMP003", display_name="Mona Haddad", local_currency="AED"),
    ]
    return {ref.id: ref for ref in refs}
