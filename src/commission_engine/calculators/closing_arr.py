"""Closing ARR workings: counts, filters and eligibility checks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from commission_engine.calculators.types import (
    ZERO,
    ClosingArrPayoutDetailRow,
    ClosingArrWorkingsSummary,
)


class EligibilityFilter(str, Enum):
    ALL = "all"
    ELIGIBLE = "eligible"
    EXCLUDED = "excluded"


class MultiYearFilter(str, Enum):
    ALL = "all"
    YES = "yes"
    NO = "no"


def summarize_closing_arr(rows: Sequence[ClosingArrPayoutDetailRow]) -> ClosingArrWorkingsSummary:
    """Count eligible and excluded rows and total their ARR."""
    eligible = 0
    closing_arr = ZERO
    eligible_adjusted = ZERO

    for row in rows:
        closing_arr += row.closing_arr_usd
        if row.is_eligible:
            eligible += 1
            eligible_adjusted += row.adjusted_arr_usd

    return ClosingArrWorkingsSummary(
        total=len(rows),
        eligible=eligible,
        excluded=len(rows) - eligible,
        closing_arr_usd=closing_arr,
        eligible_adjusted_arr_usd=eligible_adjusted,
    )


def _matches_search(row: ClosingArrPayoutDetailRow, query: str) -> bool:
    haystack = (
        row.employee_name,
        row.employee_code,
        row.pid,
        row.customer_name,
        row.customer_code,
    )
    return any(query in (value or "").lower() for value in haystack)


def filter_closing_arr(
    rows: Iterable[ClosingArrPayoutDetailRow],
    search: str | None = None,
    eligibility: EligibilityFilter = EligibilityFilter.ALL,
    multi_year: MultiYearFilter = MultiYearFilter.ALL,
) -> list[ClosingArrPayoutDetailRow]:
    """Filter workings rows the way the review screen does.

    Search is case-insensitive over employee name/code, PID and customer
    name/code.
    """
    query = search.lower() if search else None
    result: list[ClosingArrPayoutDetailRow] = []

    for row in rows:
        if query and not _matches_search(row, query):
            continue
        if eligibility is EligibilityFilter.ELIGIBLE and not row.is_eligible:
            continue
        if eligibility is EligibilityFilter.EXCLUDED and row.is_eligible:
            continue
        if multi_year is MultiYearFilter.YES and not row.is_multi_year:
            continue
        if multi_year is MultiYearFilter.NO and row.is_multi_year:
            continue
        result.append(row)

    return result


def eligibility_violations(
    rows: Iterable[ClosingArrPayoutDetailRow],
) -> list[str]:
    """List excluded rows that carry no exclusion reason.

    Returns list of messages (empty if every excluded row is explained).
    """
    errors: list[str] = []
    for row in rows:
        if not row.is_eligible and not row.exclusion_reason:
            errors.append(
                f"Closing ARR row {row.pid} for employee {row.employee_id} "
                "is excluded without a reason"
            )
    return errors
