"""Employee dashboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query

from commission_engine.api.dependencies import DbSession
from commission_engine.api.schemas import DashboardSummaryResponse
from commission_engine.services.workings_service import DashboardSummaryService

router = APIRouter(prefix="/employees", tags=["dashboard"])


@router.get(
    "/{employee_code}/dashboard-summary",
    response_model=DashboardSummaryResponse,
)
async def get_dashboard_summary(
    db: DbSession,
    employee_code: Annotated[str, Path()],
    fiscal_year: Annotated[int, Query(ge=2000, le=2100)],
) -> DashboardSummaryResponse:
    """Get the payout summary for an employee's fiscal year.

    ``is_from_payout_run`` is false when no payout runs cover the year and
    the caller should fall back to its own estimate.
    """
    summary = await DashboardSummaryService(db).summary_for(employee_code, fiscal_year)
    return DashboardSummaryResponse.model_validate(summary)
