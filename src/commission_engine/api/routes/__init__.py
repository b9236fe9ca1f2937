"""API routes."""

from commission_engine.api.routes.dashboard import router as dashboard_router
from commission_engine.api.routes.health import router as health_router
from commission_engine.api.routes.payout_runs import router as payout_runs_router
from commission_engine.api.routes.plans import router as plans_router

__all__ = ["dashboard_router", "health_router", "payout_runs_router", "plans_router"]
