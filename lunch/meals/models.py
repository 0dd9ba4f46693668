from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

MEAL_TYPE_DISPLAY_NAMES: dict[str, str] = {
    "dining_out": "Dining Out",
    "delivery": "Delivery",
    "takeout": "Takeout",
    "groceries": "Groceries",
    "snack": "Snack",
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "dinner": "Dinner",
}


class Meal(BaseModel):
    """A logged dining experience as supplied by the meal history store.

    ``date`` is always timezone-aware; naive input is taken to be UTC.
    """

    model_config = ConfigDict(frozen=True)

    meal_type: str
    cost: float = Field(..., ge=0)
    date: datetime
    notes: str | None = None

    id: int | None = None
    user_id: str | None = None
    restaurant_name: str | None = None

    @field_validator("date")
    @classmethod
    def assume_utc_when_naive(cls, value: datetime) -> datetime:
        """Naive timestamps are read as UTC so they compare with aware week bounds."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def display_meal_type(self) -> str:
        return MEAL_TYPE_DISPLAY_NAMES.get(self.meal_type, "Experience")

    @property
    def formatted_cost(self) -> str:
        return f"${self.cost:.2f}"


class UserPreferences(BaseModel):
    """Subset of the user's stored preferences consumed by the tracker.

    Attributes:
        weekly_budget: Weekly dining capacity the user configured
        meal_frequency_per_day: How many meals a day the user expects to log
        budget_level: Price tier 1-4 (one per $ symbol)
    """

    model_config = ConfigDict(frozen=True)

    weekly_budget: float = Field(default=200.0, ge=0)
    meal_frequency_per_day: int = Field(default=3, ge=0)
    budget_level: int = Field(default=2, ge=1, le=4)
