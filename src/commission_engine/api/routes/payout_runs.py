"""Payout run workings endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query, status

from commission_engine.api.dependencies import DbSession
from commission_engine.api.schemas import (
    ClosingArrDetailResponse,
    ClosingArrSummaryResponse,
    ClosingArrWorkingsResponse,
    EmployeeWorkingsResponse,
    ErrorResponse,
    MetricColumnResponse,
    PayoutRunWorkingsResponse,
)
from commission_engine.calculators.closing_arr import (
    EligibilityFilter,
    MultiYearFilter,
    filter_closing_arr,
    summarize_closing_arr,
)
from commission_engine.calculators.workings import discover_metric_columns
from commission_engine.services.workings_service import PayoutWorkingsService

router = APIRouter(prefix="/payout-runs", tags=["payout-runs"])


async def _require_payout_run(service: PayoutWorkingsService, payout_run_id: UUID) -> None:
    if await service.get_payout_run(payout_run_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Payout run {payout_run_id} not found",
        )


@router.get(
    "/{payout_run_id}/workings",
    response_model=PayoutRunWorkingsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payout_run_workings(
    db: DbSession,
    payout_run_id: Annotated[UUID, Path()],
) -> PayoutRunWorkingsResponse:
    """Get per-employee metric workings for a payout run."""
    service = PayoutWorkingsService(db)
    await _require_payout_run(service, payout_run_id)

    workings = await service.employee_workings(payout_run_id)

    return PayoutRunWorkingsResponse(
        payout_run_id=str(payout_run_id),
        columns=[MetricColumnResponse.model_validate(c) for c in discover_metric_columns(workings)],
        employees=[EmployeeWorkingsResponse.model_validate(w) for w in workings],
    )


@router.get(
    "/{payout_run_id}/closing-arr",
    response_model=ClosingArrWorkingsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_closing_arr_workings(
    db: DbSession,
    payout_run_id: Annotated[UUID, Path()],
    search: str | None = None,
    eligibility: Annotated[EligibilityFilter, Query()] = EligibilityFilter.ALL,
    multi_year: Annotated[MultiYearFilter, Query()] = MultiYearFilter.ALL,
) -> ClosingArrWorkingsResponse:
    """Get project-level closing ARR workings for a payout run.

    Summary counts cover the whole run; filters only narrow the items.
    """
    service = PayoutWorkingsService(db)
    await _require_payout_run(service, payout_run_id)

    rows = await service.closing_arr_workings(payout_run_id)
    filtered = filter_closing_arr(rows, search=search, eligibility=eligibility, multi_year=multi_year)

    return ClosingArrWorkingsResponse(
        summary=ClosingArrSummaryResponse.model_validate(summarize_closing_arr(rows)),
        items=[ClosingArrDetailResponse.model_validate(r) for r in filtered],
    )
