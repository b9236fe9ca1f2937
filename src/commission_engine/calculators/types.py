"""Type definitions for the compensation aggregation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")
UNKNOWN_EMPLOYEE_NAME = "Unknown"


class ComponentType(str, Enum):
    """Component types carried by payout metric detail rows."""

    VARIABLE_PAY = "variable_pay"
    COMMISSION = "commission"
    NRR = "nrr"
    SPIFF = "spiff"
    DEAL_TEAM_SPIFF = "deal_team_spiff"
    COLLECTION_RELEASE = "collection_release"
    YEAR_END_RELEASE = "year_end_release"
    CLAWBACK = "clawback"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> ComponentType:
        # Stored values outside the known set are surfaced as OTHER
        return cls.OTHER


class PayoutBucket(str, Enum):
    """Aggregation bucket a record rolls up into."""

    VARIABLE_PAY = "VARIABLE_PAY"
    COMMISSION = "COMMISSION"
    OTHER = "OTHER"


class CashChannel(str, Enum):
    """Cash-timing channel of a record."""

    BOOKING = "BOOKING"
    COLLECTION_HOLDING = "COLLECTION_HOLDING"
    YEAR_END_HOLDING = "YEAR_END_HOLDING"
    NONE = "NONE"


class PayoutCategory(str, Enum):
    """Category of a monthly payout type label."""

    VP = "vp"
    COMMISSION = "commission"
    ADDITIONAL_PAY = "additional_pay"
    RELEASE = "release"
    DEDUCTION = "deduction"
    UNKNOWN = "unknown"


class InvalidTierError(ValueError):
    """Raised when a renewal multiplier tier is constructed with bad bounds."""


@dataclass(frozen=True)
class RenewalMultiplierTier:
    """A renewal-years range mapped to a closing ARR multiplier."""

    min_years: int
    max_years: int | None  # None = unbounded
    multiplier: Decimal
    plan_id: str | None = None
    tier_id: str | None = None

    def __post_init__(self) -> None:
        if self.min_years < 0:
            raise InvalidTierError(f"min_years must be >= 0, got {self.min_years}")
        if self.max_years is not None and self.max_years < self.min_years:
            raise InvalidTierError(
                f"max_years {self.max_years} is below min_years {self.min_years}"
            )
        if self.multiplier <= 0:
            raise InvalidTierError(f"multiplier must be positive, got {self.multiplier}")

    def contains(self, years: int) -> bool:
        """Check whether a renewal-years value falls inside this tier."""
        if years < self.min_years:
            return False
        return self.max_years is None or years <= self.max_years


@dataclass(frozen=True)
class EmployeeReference:
    """Employee attributes used to label derived structures."""

    id: str
    code: str
    display_name: str
    local_currency: str = "USD"


@dataclass(frozen=True)
class PayoutDetailRow:
    """One computed line item for an employee within a payout run."""

    payout_run_id: str
    employee_id: str
    component_type: ComponentType
    metric_name: str
    plan_id: str | None = None
    plan_name: str | None = None
    target_bonus_usd: Decimal = ZERO
    allocated_ote_usd: Decimal = ZERO
    target_usd: Decimal = ZERO
    actual_usd: Decimal = ZERO
    achievement_pct: Decimal = ZERO
    multiplier: Decimal = ZERO
    ytd_eligible_usd: Decimal = ZERO
    prior_paid_usd: Decimal = ZERO
    this_month_usd: Decimal = ZERO
    booking_usd: Decimal = ZERO
    collection_usd: Decimal = ZERO
    year_end_usd: Decimal = ZERO
    commission_rate_pct: Decimal | None = None
    notes: str | None = None
    detail_id: str | None = None

    # Joined employee data
    employee_name: str | None = None
    employee_code: str | None = None
    local_currency: str | None = None


@dataclass(frozen=True)
class ClosingArrPayoutDetailRow:
    """Closing ARR contribution for one employee and customer project.

    ``employee_id`` carries the human-facing employee code.
    """

    payout_run_id: str
    employee_id: str
    pid: str
    renewal_years: int = 1
    closing_arr_usd: Decimal = ZERO
    multiplier: Decimal = Decimal("1.0")
    adjusted_arr_usd: Decimal = ZERO
    is_eligible: bool = True
    exclusion_reason: str | None = None
    is_multi_year: bool = False
    customer_name: str | None = None
    customer_code: str | None = None
    bu: str | None = None
    product: str | None = None
    period: str | None = None
    end_date: date | None = None
    order_category: str | None = None
    detail_id: str | None = None

    # Joined employee data
    employee_name: str | None = None
    employee_code: str | None = None


@dataclass(frozen=True)
class MonthlyPayoutRecord:
    """One payout row per employee, period and payout type.

    ``calculated_amount_usd`` is the recognized amount; the booking,
    collection and year-end amounts are cash-timing splits tracked
    independently of it.
    """

    employee_id: str
    period: str  # YYYY-MM
    payout_type: str
    calculated_amount_usd: Decimal = ZERO
    booking_amount_usd: Decimal = ZERO
    collection_amount_usd: Decimal = ZERO
    year_end_amount_usd: Decimal = ZERO
    component_type: ComponentType = ComponentType.COMMISSION


@dataclass(frozen=True)
class PayoutClassification:
    """Result of classifying a payout or detail record."""

    bucket: PayoutBucket
    counts_toward_eligible: bool
    cash_channel: CashChannel
    category: PayoutCategory


@dataclass
class WorkingsTotals:
    """Rolled-up monetary fields for a set of detail rows."""

    ytd_eligible_usd: Decimal = ZERO
    prior_paid_usd: Decimal = ZERO
    this_month_usd: Decimal = ZERO
    booking_usd: Decimal = ZERO
    collection_usd: Decimal = ZERO
    year_end_usd: Decimal = ZERO

    def add(self, row: PayoutDetailRow) -> None:
        self.ytd_eligible_usd += row.ytd_eligible_usd
        self.prior_paid_usd += row.prior_paid_usd
        self.this_month_usd += row.this_month_usd
        self.booking_usd += row.booking_usd
        self.collection_usd += row.collection_usd
        self.year_end_usd += row.year_end_usd

    @property
    def holding_usd(self) -> Decimal:
        return self.collection_usd + self.year_end_usd


@dataclass
class EmployeeWorkings:
    """All payout detail rows for one employee within one payout run."""

    employee_id: str
    employee_name: str
    employee_code: str
    local_currency: str
    plan_name: str | None
    target_bonus_usd: Decimal
    vp_details: list[PayoutDetailRow] = field(default_factory=list)
    commission_details: list[PayoutDetailRow] = field(default_factory=list)
    other_details: list[PayoutDetailRow] = field(default_factory=list)
    all_details: list[PayoutDetailRow] = field(default_factory=list)
    totals: dict[PayoutBucket, WorkingsTotals] = field(
        default_factory=lambda: {bucket: WorkingsTotals() for bucket in PayoutBucket}
    )
    eligible_total: WorkingsTotals = field(default_factory=WorkingsTotals)

    def details_for(self, bucket: PayoutBucket) -> list[PayoutDetailRow]:
        """Get the detail sub-list for a bucket."""
        if bucket is PayoutBucket.VARIABLE_PAY:
            return self.vp_details
        if bucket is PayoutBucket.COMMISSION:
            return self.commission_details
        return self.other_details

    def totals_for(self, bucket: PayoutBucket) -> WorkingsTotals:
        return self.totals[bucket]


@dataclass(frozen=True)
class DashboardPayoutSummary:
    """Per-employee, per-fiscal-year payout summary."""

    total_eligible: Decimal = ZERO
    total_paid: Decimal = ZERO  # booking channel
    total_holding_collection: Decimal = ZERO
    total_holding_year_end: Decimal = ZERO
    total_holding: Decimal = ZERO
    total_commission: Decimal = ZERO
    total_variable_pay: Decimal = ZERO
    total_clawback: Decimal = ZERO
    is_from_payout_run: bool = False
    months_covered: int = 0


@dataclass(frozen=True)
class MetricColumn:
    """A distinct (component type, metric) column across employee workings."""

    component_type: ComponentType
    metric_name: str


@dataclass(frozen=True)
class ClosingArrWorkingsSummary:
    """Counts and totals across closing ARR workings rows."""

    total: int = 0
    eligible: int = 0
    excluded: int = 0
    closing_arr_usd: Decimal = ZERO
    eligible_adjusted_arr_usd: Decimal = ZERO
