"""Left-join of derived rows with employee reference attributes."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from commission_engine.calculators.types import (
    UNKNOWN_EMPLOYEE_NAME,
    ClosingArrPayoutDetailRow,
    EmployeeReference,
    PayoutDetailRow,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"

RowT = TypeVar("RowT", PayoutDetailRow, ClosingArrPayoutDetailRow)


class JoinKey(str, Enum):
    """Business key a source row carries for its employee."""

    ID = "id"  # internal employee row identifier
    CODE = "code"  # human-facing employee code


@dataclass(frozen=True)
class EmployeeDisplay:
    """Display attributes attached to a row."""

    name: str
    code: str
    local_currency: str
    matched: bool


def index_references(
    references: Iterable[EmployeeReference], join_key: JoinKey
) -> dict[str, EmployeeReference]:
    """Index a reference table by the requested business key."""
    if join_key is JoinKey.ID:
        return {ref.id: ref for ref in references}
    return {ref.code: ref for ref in references}


def lookup_display(
    identifier: str,
    references: Mapping[str, EmployeeReference],
    default_currency: str = DEFAULT_CURRENCY,
) -> EmployeeDisplay:
    """Resolve display attributes for an employee identifier.

    A missing reference is not an error: the placeholder name is used and
    the raw identifier stands in for the employee code.
    """
    ref = references.get(identifier)
    if ref is None:
        logger.debug("No employee reference for %s, using placeholder", identifier)
        return EmployeeDisplay(
            name=UNKNOWN_EMPLOYEE_NAME,
            code=identifier,
            local_currency=default_currency,
            matched=False,
        )
    return EmployeeDisplay(
        name=ref.display_name,
        code=ref.code,
        local_currency=ref.local_currency or default_currency,
        matched=True,
    )


def attach_display(row: RowT, display: EmployeeDisplay) -> RowT:
    """Return a copy of the row carrying the display attributes."""
    changes: dict[str, str] = {
        "employee_name": display.name,
        "employee_code": display.code,
    }
    if isinstance(row, PayoutDetailRow):
        changes["local_currency"] = display.local_currency
    return dataclasses.replace(row, **changes)


def enrich(
    rows: Sequence[RowT],
    reference_table: Iterable[EmployeeReference],
    join_key: JoinKey,
    default_currency: str = DEFAULT_CURRENCY,
) -> list[RowT]:
    """Attach employee display attributes to every row.

    Left-join semantics: all rows are kept in input order, unmatched rows
    get placeholder values. Input rows are not modified.

    Args:
        rows: Rows whose ``employee_id`` holds the join value
        reference_table: Employee reference attributes
        join_key: Which employee attribute ``employee_id`` refers to
        default_currency: Currency reported for unmatched rows
    """
    index = index_references(reference_table, join_key)
    return [
        attach_display(row, lookup_display(row.employee_id, index, default_currency))
        for row in rows
    ]
