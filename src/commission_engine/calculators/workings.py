"""Per-employee grouping of payout run detail rows."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from commission_engine.calculators.classifier import bucket_for_component, classify_detail_row
from commission_engine.calculators.enrichment import (
    DEFAULT_CURRENCY,
    attach_display,
    lookup_display,
)
from commission_engine.calculators.types import (
    ZERO,
    ComponentType,
    EmployeeReference,
    EmployeeWorkings,
    MetricColumn,
    PayoutDetailRow,
)

logger = logging.getLogger(__name__)

# Column group order used by the workings summary view
COMPONENT_GROUP_ORDER: dict[ComponentType, int] = {
    ComponentType.VARIABLE_PAY: 0,
    ComponentType.COMMISSION: 1,
    ComponentType.NRR: 2,
    ComponentType.SPIFF: 3,
    ComponentType.DEAL_TEAM_SPIFF: 4,
    ComponentType.COLLECTION_RELEASE: 5,
    ComponentType.YEAR_END_RELEASE: 6,
    ComponentType.CLAWBACK: 7,
}
UNGROUPED_ORDER = 99


class EmployeeAggregationEngine:
    """Groups a payout run's detail rows into per-employee workings.

    Pipeline per row (input order):
    1) Resolve employee display attributes (placeholder when missing)
    2) Append to all_details
    3) Append to exactly one of vp/commission/other details by component type
    4) Roll amounts into bucket totals, and into the eligible total when the
       row counts toward eligible compensation

    Employees come back sorted by display name. Rows are assumed to belong
    to a single payout run.
    """

    def __init__(self, default_currency: str = DEFAULT_CURRENCY):
        self.default_currency = default_currency

    def group(
        self,
        details: Iterable[PayoutDetailRow],
        employees_by_id: Mapping[str, EmployeeReference],
    ) -> list[EmployeeWorkings]:
        grouped: dict[str, EmployeeWorkings] = {}

        for row in details:
            display = lookup_display(row.employee_id, employees_by_id, self.default_currency)
            workings = grouped.get(row.employee_id)
            if workings is None:
                workings = EmployeeWorkings(
                    employee_id=row.employee_id,
                    employee_name=display.name,
                    employee_code=display.code,
                    local_currency=display.local_currency,
                    plan_name=row.plan_name,
                    target_bonus_usd=row.target_bonus_usd or ZERO,
                )
                grouped[row.employee_id] = workings

            enriched = attach_display(row, display)
            bucket = bucket_for_component(row.component_type)

            workings.all_details.append(enriched)
            workings.details_for(bucket).append(enriched)
            workings.totals[bucket].add(enriched)
            if classify_detail_row(row).counts_toward_eligible:
                workings.eligible_total.add(enriched)

        if not grouped:
            logger.debug("No payout detail rows to group")

        # sorted() is stable, ties keep first-seen order
        return sorted(grouped.values(), key=lambda w: w.employee_name)


def group_employee_workings(
    details: Iterable[PayoutDetailRow],
    employees_by_id: Mapping[str, EmployeeReference],
    default_currency: str = DEFAULT_CURRENCY,
) -> list[EmployeeWorkings]:
    """Group detail rows into employee workings sorted by display name."""
    return EmployeeAggregationEngine(default_currency).group(details, employees_by_id)


def discover_metric_columns(workings: Sequence[EmployeeWorkings]) -> list[MetricColumn]:
    """Find the distinct metric columns across all employees.

    Columns are ordered by component group, then metric name.
    """
    seen: dict[tuple[ComponentType, str], MetricColumn] = {}
    for employee in workings:
        for row in employee.all_details:
            key = (row.component_type, row.metric_name)
            if key not in seen:
                seen[key] = MetricColumn(component_type=row.component_type, metric_name=row.metric_name)

    return sorted(
        seen.values(),
        key=lambda c: (COMPONENT_GROUP_ORDER.get(c.component_type, UNGROUPED_ORDER), c.metric_name),
    )


def find_detail(
    workings: EmployeeWorkings, column: MetricColumn
) -> PayoutDetailRow | None:
    """Find an employee's detail row for a metric column, if any."""
    for row in workings.all_details:
        if row.component_type is column.component_type and row.metric_name == column.metric_name:
            return row
    return None
