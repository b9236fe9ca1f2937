"""Dashboard payout summary aggregation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from commission_engine.calculators.classifier import CLAWBACK, classify_payout_record
from commission_engine.calculators.types import (
    ZERO,
    DashboardPayoutSummary,
    MonthlyPayoutRecord,
    PayoutBucket,
)

logger = logging.getLogger(__name__)


class DashboardSummaryAggregator:
    """Reduces an employee's monthly payout records into one summary.

    Release and clawback records are skipped entirely: they move cash
    between timing buckets or reverse earlier amounts. For every other
    record:
    - calculated amount goes to variable pay or commission
    - booking amount is paid, collection and year-end amounts are holding
    - the period is counted

    Accumulation is exact Decimal addition, so the result does not depend
    on record order.
    """

    @staticmethod
    def empty() -> DashboardPayoutSummary:
        """Zero summary telling callers to fall back to an estimate."""
        return DashboardPayoutSummary(is_from_payout_run=False, months_covered=0)

    @staticmethod
    def summarize(records: Sequence[MonthlyPayoutRecord]) -> DashboardPayoutSummary:
        if not records:
            logger.debug("No payout records, returning fallback summary")
            return DashboardSummaryAggregator.empty()

        total_variable_pay = ZERO
        total_commission = ZERO
        total_paid = ZERO
        total_holding_collection = ZERO
        total_holding_year_end = ZERO
        total_clawback = ZERO
        periods: set[str] = set()

        for record in records:
            classification = classify_payout_record(record)

            if not classification.counts_toward_eligible:
                if record.payout_type == CLAWBACK:
                    total_clawback += abs(record.calculated_amount_usd)
                continue

            if classification.bucket is PayoutBucket.VARIABLE_PAY:
                total_variable_pay += record.calculated_amount_usd
            else:
                # OTHER folds into commission: every non-VP payout type
                total_commission += record.calculated_amount_usd

            total_paid += record.booking_amount_usd
            total_holding_collection += record.collection_amount_usd
            total_holding_year_end += record.year_end_amount_usd
            periods.add(record.period)

        return DashboardPayoutSummary(
            total_eligible=total_variable_pay + total_commission,
            total_paid=total_paid,
            total_holding_collection=total_holding_collection,
            total_holding_year_end=total_holding_year_end,
            total_holding=total_holding_collection + total_holding_year_end,
            total_commission=total_commission,
            total_variable_pay=total_variable_pay,
            total_clawback=total_clawback,
            is_from_payout_run=True,
            months_covered=len(periods),
        )


def summarize_payouts(records: Sequence[MonthlyPayoutRecord]) -> DashboardPayoutSummary:
    """Module-level shortcut for DashboardSummaryAggregator.summarize."""
    return DashboardSummaryAggregator.summarize(records)


def filter_fiscal_year(
    records: Iterable[MonthlyPayoutRecord], fiscal_year: int
) -> list[MonthlyPayoutRecord]:
    """Keep records whose period falls within YYYY-01..YYYY-12."""
    start = f"{fiscal_year}-01"
    end = f"{fiscal_year}-12"
    return [r for r in records if start <= r.period[:7] <= end]
