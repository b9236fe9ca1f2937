"""Compensation plan multiplier endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from commission_engine.api.dependencies import DbSession
from commission_engine.api.schemas import RenewalMultiplierResponse
from commission_engine.services.workings_service import RenewalMultiplierService

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get(
    "/{plan_id}/renewal-multipliers/resolve",
    response_model=RenewalMultiplierResponse,
)
async def resolve_renewal_multiplier(
    db: DbSession,
    plan_id: Annotated[UUID, Path()],
    years: Annotated[int, Query(ge=0)],
) -> RenewalMultiplierResponse:
    """Resolve the closing ARR multiplier for a number of renewal years.

    Plans without a matching tier resolve to 1.0.
    """
    multiplier = await RenewalMultiplierService(db).resolve(plan_id, years)
    return RenewalMultiplierResponse(
        plan_id=str(plan_id),
        renewal_years=years,
        multiplier=multiplier,
    )
