from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lunch.investment.levels import (
    GuidanceLevel,
    UsageLevel,
    capacity_ratio,
    guidance_level,
    usage_level,
)
from lunch.meals.models import Meal


class WeeklyInvestmentState(BaseModel):
    """Snapshot of the current week's dining investment.

    Only WeeklyInvestmentTracker produces new snapshots. Everything derived from
    spend and capacity is a property, recomputed on each read.

    Attributes:
        weekly_capacity: User-configured weekly spending ceiling
        current_spent: Sum of meal costs within [week_start_date, week_start_date + 7 days)
        experiences_logged: Number of meals logged this week
        target_experiences: Weekly experience goal
        weekly_meals: Meals backing current_spent
        week_start_date: First day of the tracked week (inclusive)
        is_loading: A refresh is in flight
        error_message: Last refresh failure, cleared on the next successful refresh
    """

    model_config = ConfigDict(frozen=True)

    weekly_capacity: float = Field(default=200.0, ge=0)
    current_spent: float = Field(default=0.0, ge=0)
    experiences_logged: int = Field(default=0, ge=0)
    target_experiences: int = Field(default=10, ge=0)
    weekly_meals: tuple[Meal, ...] = ()
    week_start_date: date
    is_loading: bool = False
    error_message: str | None = None

    @model_validator(mode="after")
    def validate_loading_flag(self) -> "WeeklyInvestmentState":
        if self.error_message is not None and self.is_loading:
            raise ValueError("error_message implies is_loading=False")
        return self

    @property
    def remaining_capacity(self) -> float:
        return max(0.0, self.weekly_capacity - self.current_spent)

    @property
    def capacity_progress(self) -> float:
        return capacity_ratio(self.current_spent, self.weekly_capacity)

    @property
    def experience_progress(self) -> float:
        if self.target_experiences <= 0:
            return 0.0
        return self.experiences_logged / self.target_experiences

    @property
    def capacity_usage_level(self) -> UsageLevel:
        return usage_level(self.capacity_progress)

    @property
    def investment_guidance_level(self) -> GuidanceLevel:
        return guidance_level(self.capacity_progress)


class InvestmentImpact(BaseModel):
    """What logging a prospective expense would do to this week's capacity.

    Request-scoped and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    meal_cost: float
    projected_spent: float
    projected_remaining: float
    impact_level: UsageLevel
    guidance_level: GuidanceLevel
    message: str
    exceeds_capacity: bool
