"""Compensation plan and renewal multiplier models."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commission_engine.calculators.types import RenewalMultiplierTier
from commission_engine.models.base import Base, TimestampMixin


class CompPlan(Base, TimestampMixin):
    """Compensation plan."""

    __tablename__ = "comp_plans"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    effective_year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    renewal_multipliers: Mapped[list[ClosingArrRenewalMultiplier]] = relationship(
        back_populates="plan",
        cascade="all, delete-orphan",
    )


class ClosingArrRenewalMultiplier(Base, TimestampMixin):
    """Renewal-years tier for closing ARR adjustment, scoped to a plan."""

    __tablename__ = "closing_arr_renewal_multipliers"
    __table_args__ = (
        CheckConstraint("min_years >= 0", name="renewal_multiplier_min_years_chk"),
        CheckConstraint(
            "max_years IS NULL OR max_years >= min_years",
            name="renewal_multiplier_range_chk",
        ),
        CheckConstraint("multiplier_value > 0", name="renewal_multiplier_value_chk"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    plan_id: Mapped[UUID] = mapped_column(
        ForeignKey("comp_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    min_years: Mapped[int] = mapped_column(Integer, nullable=False)
    max_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    multiplier_value: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("1.0"))

    # Relationships
    plan: Mapped[CompPlan] = relationship(back_populates="renewal_multipliers")

    def to_tier(self) -> RenewalMultiplierTier:
        return RenewalMultiplierTier(
            min_years=self.min_years,
            max_years=self.max_years,
            multiplier=self.multiplier_value,
            plan_id=str(self.plan_id),
            tier_id=str(self.id),
        )
