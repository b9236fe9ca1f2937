"""Employee reference model."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from commission_engine.calculators.types import EmployeeReference
from commission_engine.models.base import Base, TimestampMixin


class Employee(Base, TimestampMixin):
    """Employee record.

    ``id`` is the internal row identifier; ``employee_code`` is the
    human-facing code that payout and closing ARR rows reference.
    """

    __tablename__ = "employees"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_code: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    local_currency: Mapped[str] = mapped_column(String, nullable=False, default="USD")

    def to_reference(self) -> EmployeeReference:
        """Convert to the reference attributes used for display joins."""
        return EmployeeReference(
            id=str(self.id),
            code=self.employee_code,
            display_name=self.full_name,
            local_currency=self.local_currency or "USD",
        )
