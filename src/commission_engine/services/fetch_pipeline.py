"""Two-phase dependent fetch: primary rows, then employee references."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from commission_engine.calculators.enrichment import JoinKey, index_references
from commission_engine.calculators.types import EmployeeReference
from commission_engine.models import Employee

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")


@dataclass
class FetchResult(Generic[RowT]):
    """Primary rows plus the employee references they point at."""

    rows: list[RowT]
    join_key: JoinKey
    references: list[EmployeeReference] = field(default_factory=list)
    short_circuited: bool = False

    def references_by_key(self) -> dict[str, EmployeeReference]:
        return index_references(self.references, self.join_key)


class TwoPhaseFetch(Generic[RowT]):
    """Runs the dependent read behind every workings view.

    Stages (stable order):
    1) Load primary rows and convert them to core rows
    2) Early exit when there are no primary rows (no reference query)
    3) Collect distinct employee identifiers in first-seen order
    4) Load employee references keyed by id or code

    Database errors propagate unmodified.
    """

    def __init__(
        self,
        session: AsyncSession,
        join_key: JoinKey,
        to_row: Callable[[Any], RowT],
        identifier: Callable[[RowT], str],
    ):
        self.session = session
        self.join_key = join_key
        self.to_row = to_row
        self.identifier = identifier

    async def run(self, primary_query: Select) -> FetchResult[RowT]:
        rows = await self._load_primary(primary_query)
        if not rows:
            return self._empty()

        identifiers = self._distinct_identifiers(rows)
        references = await self._load_references(identifiers)
        return FetchResult(rows=rows, join_key=self.join_key, references=references)

    async def _load_primary(self, primary_query: Select) -> list[RowT]:
        result = await self.session.execute(primary_query)
        return [self.to_row(obj) for obj in result.scalars().all()]

    def _empty(self) -> FetchResult[RowT]:
        logger.debug("Primary fetch returned no rows, skipping reference lookup")
        return FetchResult(rows=[], join_key=self.join_key, short_circuited=True)

    def _distinct_identifiers(self, rows: Sequence[RowT]) -> list[str]:
        return list(dict.fromkeys(self.identifier(row) for row in rows))

    async def _load_references(self, identifiers: list[str]) -> list[EmployeeReference]:
        if self.join_key is JoinKey.ID:
            query = select(Employee).where(Employee.id.in_([UUID(i) for i in identifiers]))
        else:
            query = select(Employee).where(Employee.employee_code.in_(identifiers))

        result = await self.session.execute(query)
        references = [employee.to_reference() for employee in result.scalars().all()]

        missing = len(identifiers) - len(references)
        if missing > 0:
            logger.debug("%d employee references not found for join on %s", missing, self.join_key.value)
        return references
