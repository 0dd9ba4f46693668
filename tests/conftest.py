"""Root conftest for all tests.

Shared fixtures: a fixed clock, meal factory, sample preferences and an
in-memory meal source.
"""

import datetime as dt
from collections.abc import Callable

import pytest

from lunch.meals.models import Meal, UserPreferences
from lunch.meals.source import InMemoryMealHistorySource

# Wednesday; the tracked week starts Monday 2024-01-01
FIXED_NOW = dt.datetime(2024, 1, 3, 12, 0, tzinfo=dt.UTC)


@pytest.fixture
def fixed_now() -> dt.datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], dt.datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_meal() -> Callable[..., Meal]:
    """Factory for meals relative to the fixed clock."""

    def _make_meal(
        *,
        cost: float = 12.5,
        days_ago: int = 0,
        meal_type: str = "lunch",
        notes: str | None = None,
    ) -> Meal:
        return Meal(
            meal_type=meal_type,
            cost=cost,
            date=FIXED_NOW - dt.timedelta(days=days_ago),
            notes=notes,
        )

    return _make_meal


@pytest.fixture
def preferences() -> UserPreferences:
    return UserPreferences(weekly_budget=200.0, meal_frequency_per_day=3, budget_level=2)


@pytest.fixture
def user_id() -> str:
    return "user-123"


@pytest.fixture
def meal_source() -> InMemoryMealHistorySource:
    return InMemoryMealHistorySource()
