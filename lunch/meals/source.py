"""Meal history source interface.

The meal store lives outside this package. Anything that can answer
``get_meals_by_date_range`` can feed the tracker and the achievement engine.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from loguru import logger

from lunch.meals.errors import MealSourceError
from lunch.meals.models import Meal


class MealHistorySource(Protocol):
    """Read-only access to a user's logged meals."""

    async def get_meals_by_date_range(self, user_id: str, start: datetime, end: datetime) -> list[Meal]:
        """Return meals with ``start <= meal.date < end``."""
        ...


class InMemoryMealHistorySource:
    """Dict-backed meal source for local development and tests."""

    def __init__(self, meals: Iterable[Meal] | None = None, *, user_id: str | None = None):
        self._meals: dict[str, list[Meal]] = defaultdict(list)
        self._unavailable_reason: str | None = None
        for meal in meals or []:
            self.add_meal(user_id or meal.user_id or "", meal)

    def add_meal(self, user_id: str, meal: Meal) -> None:
        self._meals[user_id].append(meal)

    def set_unavailable(self, reason: str | None) -> None:
        """Make every read fail with ``reason`` (``None`` restores the source)."""
        self._unavailable_reason = reason

    async def get_meals_by_date_range(self, user_id: str, start: datetime, end: datetime) -> list[Meal]:
        if self._unavailable_reason is not None:
            raise MealSourceError(self._unavailable_reason)

        meals = [m for m in self._meals.get(user_id, []) if start <= m.date < end]
        meals.sort(key=lambda m: m.date)
        logger.debug(f"[MEALS] Loaded {len(meals)} meals for user_id={user_id} from {start.isoformat()} to {end.isoformat()}")
        return meals
