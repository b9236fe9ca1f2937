"""Data access services wrapping the calculation core."""

from commission_engine.services.fetch_pipeline import FetchResult, TwoPhaseFetch
from commission_engine.services.workings_service import (
    DashboardSummaryService,
    PayoutWorkingsService,
    RenewalMultiplierService,
)

__all__ = [
    "FetchResult",
    "TwoPhaseFetch",
    "DashboardSummaryService",
    "PayoutWorkingsService",
    "RenewalMultiplierService",
]
