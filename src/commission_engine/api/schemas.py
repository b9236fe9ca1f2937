"""Pydantic schemas for API response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from commission_engine.calculators.types import ComponentType, PayoutBucket


# ============================================================================
# Payout run workings schemas
# ============================================================================


class PayoutDetailResponse(BaseModel):
    """Schema for one payout metric detail row."""

    model_config = ConfigDict(from_attributes=True)

    detail_id: str | None = None
    payout_run_id: str
    employee_id: str
    component_type: ComponentType
    metric_name: str
    plan_name: str | None = None
    target_usd: Decimal
    actual_usd: Decimal
    achievement_pct: Decimal
    multiplier: Decimal
    ytd_eligible_usd: Decimal
    prior_paid_usd: Decimal
    this_month_usd: Decimal
    booking_usd: Decimal
    collection_usd: Decimal
    year_end_usd: Decimal
    commission_rate_pct: Decimal | None = None
    employee_name: str | None = None
    employee_code: str | None = None
    local_currency: str | None = None


class WorkingsTotalsResponse(BaseModel):
    """Schema for rolled-up detail amounts."""

    model_config = ConfigDict(from_attributes=True)

    ytd_eligible_usd: Decimal
    prior_paid_usd: Decimal
    this_month_usd: Decimal
    booking_usd: Decimal
    collection_usd: Decimal
    year_end_usd: Decimal


class EmployeeWorkingsResponse(BaseModel):
    """Schema for one employee's payout run workings."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    employee_name: str
    employee_code: str
    local_currency: str
    plan_name: str | None = None
    target_bonus_usd: Decimal
    vp_details: list[PayoutDetailResponse]
    commission_details: list[PayoutDetailResponse]
    other_details: list[PayoutDetailResponse]
    all_details: list[PayoutDetailResponse]
    totals: dict[PayoutBucket, WorkingsTotalsResponse]
    eligible_total: WorkingsTotalsResponse


class MetricColumnResponse(BaseModel):
    """Schema for a metric column in the workings summary."""

    model_config = ConfigDict(from_attributes=True)

    component_type: ComponentType
    metric_name: str


class PayoutRunWorkingsResponse(BaseModel):
    """Schema for a payout run's workings."""

    payout_run_id: str
    columns: list[MetricColumnResponse]
    employees: list[EmployeeWorkingsResponse]


# ============================================================================
# Closing ARR schemas
# ============================================================================


class ClosingArrDetailResponse(BaseModel):
    """Schema for one closing ARR working row."""

    model_config = ConfigDict(from_attributes=True)

    detail_id: str | None = None
    employee_id: str
    employee_name: str | None = None
    employee_code: str | None = None
    pid: str
    customer_name: str | None = None
    customer_code: str | None = None
    bu: str | None = None
    product: str | None = None
    period: str | None = None
    end_date: date | None = None
    is_multi_year: bool
    renewal_years: int
    closing_arr_usd: Decimal
    multiplier: Decimal
    adjusted_arr_usd: Decimal
    is_eligible: bool
    exclusion_reason: str | None = None


class ClosingArrSummaryResponse(BaseModel):
    """Schema for closing ARR counts."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    eligible: int
    excluded: int
    closing_arr_usd: Decimal
    eligible_adjusted_arr_usd: Decimal


class ClosingArrWorkingsResponse(BaseModel):
    """Schema for closing ARR workings of a payout run."""

    summary: ClosingArrSummaryResponse
    items: list[ClosingArrDetailResponse]


# ============================================================================
# Dashboard and multiplier schemas
# ============================================================================


class DashboardSummaryResponse(BaseModel):
    """Schema for the dashboard payout summary."""

    model_config = ConfigDict(from_attributes=True)

    total_eligible: Decimal
    total_paid: Decimal
    total_holding_collection: Decimal
    total_holding_year_end: Decimal
    total_holding: Decimal
    total_commission: Decimal
    total_variable_pay: Decimal
    total_clawback: Decimal
    is_from_payout_run: bool
    months_covered: int


class RenewalMultiplierResponse(BaseModel):
    """Schema for a resolved renewal multiplier."""

    plan_id: str
    renewal_years: int
    multiplier: Decimal


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
