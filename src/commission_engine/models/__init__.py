"""ORM models for payout run results and reference data."""

from commission_engine.models.base import Base, TimestampMixin
from commission_engine.models.compensation import ClosingArrRenewalMultiplier, CompPlan
from commission_engine.models.employee import Employee
from commission_engine.models.payout import (
    ClosingArrPayoutDetail,
    MonthlyPayout,
    PayoutMetricDetail,
    PayoutRun,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "ClosingArrPayoutDetail",
    "ClosingArrRenewalMultiplier",
    "CompPlan",
    "Employee",
    "MonthlyPayout",
    "PayoutMetricDetail",
    "PayoutRun",
]
