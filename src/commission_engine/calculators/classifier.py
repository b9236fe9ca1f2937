"""Payout taxonomy classification.

All eligibility decisions go through this module. Aggregators must not
compare payout type labels themselves.
"""

from __future__ import annotations

from commission_engine.calculators.types import (
    CashChannel,
    ComponentType,
    MonthlyPayoutRecord,
    PayoutBucket,
    PayoutCategory,
    PayoutClassification,
    PayoutDetailRow,
)

VARIABLE_PAY = "Variable Pay"
COLLECTION_RELEASE = "Collection Release"
YEAR_END_RELEASE = "Year-End Release"
CLAWBACK = "Clawback"

VP_TYPES = frozenset({VARIABLE_PAY})
COMMISSION_TYPES = frozenset({"Managed Services", "Implementation", "CR/ER", "Perpetual License"})
ADDITIONAL_PAY_TYPES = frozenset({"NRR Additional Pay", "SPIFF", "Deal Team SPIFF"})
RELEASE_TYPES = frozenset({COLLECTION_RELEASE, YEAR_END_RELEASE})
DEDUCTION_TYPES = frozenset({CLAWBACK})

# Cash-timing adjustments and reversals, never new compensation
EXCLUDED_PAYOUT_TYPES = RELEASE_TYPES | DEDUCTION_TYPES

_PAYOUT_TYPE_CHANNELS: dict[str, CashChannel] = {
    COLLECTION_RELEASE: CashChannel.COLLECTION_HOLDING,
    YEAR_END_RELEASE: CashChannel.YEAR_END_HOLDING,
    CLAWBACK: CashChannel.NONE,
}

_COMPONENT_BUCKETS: dict[ComponentType, PayoutBucket] = {
    ComponentType.VARIABLE_PAY: PayoutBucket.VARIABLE_PAY,
    ComponentType.COMMISSION: PayoutBucket.COMMISSION,
    ComponentType.NRR: PayoutBucket.OTHER,
    ComponentType.SPIFF: PayoutBucket.OTHER,
    ComponentType.DEAL_TEAM_SPIFF: PayoutBucket.OTHER,
    ComponentType.COLLECTION_RELEASE: PayoutBucket.OTHER,
    ComponentType.YEAR_END_RELEASE: PayoutBucket.OTHER,
    ComponentType.CLAWBACK: PayoutBucket.OTHER,
    ComponentType.OTHER: PayoutBucket.OTHER,
}

_COMPONENT_CATEGORIES: dict[ComponentType, PayoutCategory] = {
    ComponentType.VARIABLE_PAY: PayoutCategory.VP,
    ComponentType.COMMISSION: PayoutCategory.COMMISSION,
    ComponentType.NRR: PayoutCategory.ADDITIONAL_PAY,
    ComponentType.SPIFF: PayoutCategory.ADDITIONAL_PAY,
    ComponentType.DEAL_TEAM_SPIFF: PayoutCategory.ADDITIONAL_PAY,
    ComponentType.COLLECTION_RELEASE: PayoutCategory.RELEASE,
    ComponentType.YEAR_END_RELEASE: PayoutCategory.RELEASE,
    ComponentType.CLAWBACK: PayoutCategory.DEDUCTION,
    ComponentType.OTHER: PayoutCategory.UNKNOWN,
}

_COMPONENT_CHANNELS: dict[ComponentType, CashChannel] = {
    ComponentType.COLLECTION_RELEASE: CashChannel.COLLECTION_HOLDING,
    ComponentType.YEAR_END_RELEASE: CashChannel.YEAR_END_HOLDING,
    ComponentType.CLAWBACK: CashChannel.NONE,
}

EXCLUDED_COMPONENT_TYPES = frozenset(_COMPONENT_CHANNELS)


def classify_payout_type(payout_type: str | None) -> PayoutCategory:
    """Classify a payout type label into a category."""
    if not payout_type:
        return PayoutCategory.UNKNOWN
    if payout_type in VP_TYPES:
        return PayoutCategory.VP
    if payout_type in COMMISSION_TYPES:
        return PayoutCategory.COMMISSION
    if payout_type in ADDITIONAL_PAY_TYPES:
        return PayoutCategory.ADDITIONAL_PAY
    if payout_type in RELEASE_TYPES:
        return PayoutCategory.RELEASE
    if payout_type in DEDUCTION_TYPES:
        return PayoutCategory.DEDUCTION
    return PayoutCategory.UNKNOWN


def is_vp_type(payout_type: str | None) -> bool:
    return classify_payout_type(payout_type) is PayoutCategory.VP


def is_commission_type(payout_type: str | None) -> bool:
    return classify_payout_type(payout_type) is PayoutCategory.COMMISSION


def is_additional_pay_type(payout_type: str | None) -> bool:
    return classify_payout_type(payout_type) is PayoutCategory.ADDITIONAL_PAY


def is_release_type(payout_type: str | None) -> bool:
    return classify_payout_type(payout_type) is PayoutCategory.RELEASE


def is_deduction_type(payout_type: str | None) -> bool:
    return classify_payout_type(payout_type) is PayoutCategory.DEDUCTION


def is_vp_like_for_holdback(payout_type: str | None) -> bool:
    """VP-like for holdback tracking: variable pay plus additional pay."""
    return classify_payout_type(payout_type) in (PayoutCategory.VP, PayoutCategory.ADDITIONAL_PAY)


def is_commission_like_for_holdback(payout_type: str | None) -> bool:
    """Commission-like for holdback tracking: commissions plus releases."""
    return classify_payout_type(payout_type) in (PayoutCategory.COMMISSION, PayoutCategory.RELEASE)


def bucket_for_component(component_type: ComponentType) -> PayoutBucket:
    """Map a detail row component type straight to its bucket."""
    return _COMPONENT_BUCKETS[component_type]


def classify_payout_record(record: MonthlyPayoutRecord) -> PayoutClassification:
    """Classify a monthly payout record by its payout type label.

    Rules:
    - Release and clawback types never count toward eligible totals
    - "Variable Pay" is the variable pay bucket
    - Anything else is commission when the record's component type says
      so, otherwise other
    """
    payout_type = record.payout_type

    if payout_type in VP_TYPES:
        bucket = PayoutBucket.VARIABLE_PAY
    elif record.component_type is ComponentType.COMMISSION:
        bucket = PayoutBucket.COMMISSION
    else:
        bucket = PayoutBucket.OTHER

    return PayoutClassification(
        bucket=bucket,
        counts_toward_eligible=payout_type not in EXCLUDED_PAYOUT_TYPES,
        cash_channel=_PAYOUT_TYPE_CHANNELS.get(payout_type, CashChannel.BOOKING),
        category=classify_payout_type(payout_type),
    )


def classify_detail_row(row: PayoutDetailRow) -> PayoutClassification:
    """Classify a payout metric detail row by its component type."""
    component_type = row.component_type
    return PayoutClassification(
        bucket=_COMPONENT_BUCKETS[component_type],
        counts_toward_eligible=component_type not in EXCLUDED_COMPONENT_TYPES,
        cash_channel=_COMPONENT_CHANNELS.get(component_type, CashChannel.BOOKING),
        category=_COMPONENT_CATEGORIES[component_type],
    )


def classify(record: MonthlyPayoutRecord | PayoutDetailRow) -> PayoutClassification:
    """Classify a monthly payout record or a payout detail row."""
    if isinstance(record, MonthlyPayoutRecord):
        return classify_payout_record(record)
    if isinstance(record, PayoutDetailRow):
        return classify_detail_row(record)
    raise TypeError(f"Cannot classify {type(record).__name__}")
