"""Compensation aggregation and multiplier resolution core."""

from commission_engine.calculators.classifier import classify
from commission_engine.calculators.enrichment import JoinKey, enrich
from commission_engine.calculators.multiplier_resolver import (
    RenewalMultiplierResolver,
    resolve_renewal_multiplier,
)
from commission_engine.calculators.summary import DashboardSummaryAggregator, summarize_payouts
from commission_engine.calculators.workings import (
    EmployeeAggregationEngine,
    group_employee_workings,
)

__all__ = [
    "classify",
    "enrich",
    "JoinKey",
    "RenewalMultiplierResolver",
    "resolve_renewal_multiplier",
    "DashboardSummaryAggregator",
    "summarize_payouts",
    "EmployeeAggregationEngine",
    "group_employee_workings",
]
