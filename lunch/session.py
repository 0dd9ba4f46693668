"""Per-user wiring of the tracker and the achievement engine.

One InvestmentSession per signed-in user. It owns its tracker and engine
explicitly; nothing here is global.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from loguru import logger

from lunch.achievements.engine import AchievementEngine
from lunch.achievements.models import Achievement
from lunch.config.settings import settings
from lunch.investment.models import InvestmentImpact, WeeklyInvestmentState
from lunch.investment.tracker import WeeklyInvestmentTracker, week_bounds
from lunch.meals.models import Meal, UserPreferences
from lunch.meals.source import MealHistorySource


class InvestmentSession:
    """Refreshes weekly state and re-checks achievements after each clean refresh."""

    def __init__(
        self,
        user_id: str,
        meal_source: MealHistorySource,
        *,
        preferences: UserPreferences | None,
        celebrate_achievements: bool = True,
        clock: Callable[[], datetime] | None = None,
        engine: AchievementEngine | None = None,
    ):
        self.user_id = user_id
        self.preferences = preferences
        self.celebrate_achievements = celebrate_achievements
        self._meal_source = meal_source
        self._clock = clock or (lambda: datetime.now(UTC))
        self.tracker = WeeklyInvestmentTracker(
            meal_source,
            clock=self._clock,
            weekly_capacity=preferences.weekly_budget if preferences else None,
        )
        self.engine = engine or AchievementEngine(clock=self._clock)

    @property
    def investment(self) -> WeeklyInvestmentState:
        return self.tracker.state

    @property
    def pending_celebration(self) -> Achievement | None:
        """Latest unlock to celebrate, hidden when celebrations are turned off."""
        if not self.celebrate_achievements:
            return None
        return self.engine.state.latest_achievement

    async def refresh(self) -> tuple[Achievement, ...]:
        """Refresh the tracker, then check achievements against full history.

        Returns:
            Achievements unlocked by this refresh (empty if the refresh failed)
        """
        await self.tracker.refresh(self.user_id, self.preferences)

        state = self.tracker.state
        if self.tracker.is_disposed or state.is_loading or state.error_message is not None:
            return ()

        history = await self._load_history()
        if history is None:
            return ()
        return self.engine.check_achievements(state, history)

    async def _load_history(self) -> list[Meal] | None:
        week_start, week_end = week_bounds(self._clock())
        start = week_start - timedelta(days=settings.history_lookback_days)
        try:
            return await self._meal_source.get_meals_by_date_range(self.user_id, start, week_end)
        except Exception as e:
            logger.warning(f"[SESSION] Failed to load meal history for user_id={self.user_id}, skipping achievement check: {e}")
            return None

    async def update_preferences(self, preferences: UserPreferences) -> None:
        self.preferences = preferences
        await self.refresh()

    def calculate_meal_impact(self, meal_cost: float) -> InvestmentImpact:
        return self.tracker.calculate_meal_impact(meal_cost)

    def dismiss_latest_achievement(self) -> None:
        self.engine.dismiss_latest_achievement()

    def start_periodic_refresh(self, interval_seconds: float | None = None) -> asyncio.Task[None] | None:
        """Run the full refresh cycle periodically, achievements included.

        Each tick reads the session's current preferences.
        """
        return self.tracker.run_periodically(self.refresh, interval_seconds)

    def dispose(self) -> None:
        logger.debug(f"[SESSION] Disposing session for user_id={self.user_id}")
        self.tracker.dispose()
