"""Closing ARR renewal multiplier resolution with tiered range matching."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from decimal import Decimal

from commission_engine.calculators.types import (
    ClosingArrPayoutDetailRow,
    RenewalMultiplierTier,
)

logger = logging.getLogger(__name__)

NEUTRAL_MULTIPLIER = Decimal("1.0")


class RenewalMultiplierResolver:
    """Resolves renewal-years values to multipliers from a plan's tier set.

    Tier selection:
    1. Tiers are ordered by min_years descending
    2. The first tier whose range contains the value wins, so when tiers
       overlap the highest min_years threshold takes precedence
    3. No matching tier (or no tiers at all) means no adjustment: 1.0

    Resolution is pure so it can run against unsaved tier sets for
    what-if previews.
    """

    @staticmethod
    def find_tier(
        tiers: Iterable[RenewalMultiplierTier], years: int
    ) -> RenewalMultiplierTier | None:
        """Find the tier that applies to a renewal-years value."""
        if years < 0:
            raise ValueError(f"renewal years must be >= 0, got {years}")

        for tier in sorted(tiers, key=lambda t: t.min_years, reverse=True):
            if tier.contains(years):
                return tier
        return None

    @staticmethod
    def resolve(tiers: Iterable[RenewalMultiplierTier], years: int) -> Decimal:
        """Resolve the multiplier for a renewal-years value.

        Args:
            tiers: The plan's tier set (may be empty)
            years: Renewal years, must be >= 0

        Returns:
            The winning tier's multiplier, or 1.0 when nothing matches
        """
        tier = RenewalMultiplierResolver.find_tier(tiers, years)
        if tier is None:
            return NEUTRAL_MULTIPLIER
        return tier.multiplier

    @staticmethod
    def find_overlaps(
        tiers: Iterable[RenewalMultiplierTier],
    ) -> list[tuple[RenewalMultiplierTier, RenewalMultiplierTier]]:
        """List pairs of tiers whose ranges overlap.

        Overlaps are not an error (resolution stays deterministic), but plan
        administrators usually want to hear about them.
        """
        ordered = sorted(tiers, key=lambda t: t.min_years)
        overlaps: list[tuple[RenewalMultiplierTier, RenewalMultiplierTier]] = []

        for i, lower in enumerate(ordered):
            for higher in ordered[i + 1 :]:
                if lower.max_years is None or higher.min_years <= lower.max_years:
                    overlaps.append((lower, higher))

        if overlaps:
            logger.debug("Found %d overlapping renewal multiplier tier pairs", len(overlaps))
        return overlaps

    @staticmethod
    def apply_to_closing_arr(
        row: ClosingArrPayoutDetailRow,
        tiers: Iterable[RenewalMultiplierTier],
    ) -> ClosingArrPayoutDetailRow:
        """Return a copy of the row with its multiplier and adjusted ARR set.

        adjusted_arr_usd = closing_arr_usd * multiplier

        Only multi-year rows are looked up against the tiers; single-year
        rows always get the neutral multiplier.
        """
        if row.is_multi_year:
            multiplier = RenewalMultiplierResolver.resolve(tiers, row.renewal_years)
        else:
            multiplier = NEUTRAL_MULTIPLIER
        return dataclasses.replace(
            row,
            multiplier=multiplier,
            adjusted_arr_usd=row.closing_arr_usd * multiplier,
        )


def resolve_renewal_multiplier(
    tiers: Iterable[RenewalMultiplierTier], years: int
) -> Decimal:
    """Module-level shortcut for RenewalMultiplierResolver.resolve."""
    return RenewalMultiplierResolver.resolve(tiers, years)
