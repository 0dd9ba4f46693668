"""Weekly investment tracker.

Single source of truth for how much of this week's dining capacity has been
used. Owns one WeeklyInvestmentState per user session and replaces it
wholesale on every write, so readers always see a consistent snapshot.

Concurrency model:
- refresh() calls are serialized by an asyncio.Lock; a refresh either
  publishes a complete snapshot or keeps the previous one plus an error
- update_weekly_capacity() never suspends; last write wins
- after dispose() every in-flight completion is dropped silently
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime, time, timedelta

from loguru import logger

from lunch.config.settings import settings
from lunch.investment.errors import (
    PREFERENCES_UNAVAILABLE_MESSAGE,
    InvalidCapacityError,
    load_failed_message,
)
from lunch.investment.impact import calculate_meal_impact
from lunch.investment.models import InvestmentImpact, WeeklyInvestmentState
from lunch.meals.models import UserPreferences
from lunch.meals.source import MealHistorySource

Clock = Callable[[], datetime]
PreferencesProvider = Callable[[], UserPreferences | None]
RefreshAction = Callable[[], Awaitable[object]]

WEEK_LENGTH = timedelta(days=7)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def week_start_for(moment: datetime) -> date:
    """Monday of the week containing ``moment``."""
    day = moment.date()
    return day - timedelta(days=day.weekday())


def week_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetime range of the week containing ``moment``.

    Bounds carry the timezone of ``moment``; a naive moment is read as UTC.
    """
    start = datetime.combine(week_start_for(moment), time.min, tzinfo=moment.tzinfo or UTC)
    return start, start + WEEK_LENGTH


def target_experiences_for(preferences: UserPreferences) -> int:
    """Weekly experience goal scaled by meal frequency and budget level."""
    base_target = preferences.meal_frequency_per_day * 7
    scaled = base_target * preferences.budget_level / 4.0
    # half rounds up
    target = math.floor(scaled + 0.5)
    return max(settings.min_target_experiences, min(settings.max_target_experiences, target))


class WeeklyInvestmentTracker:
    """Aggregates this week's meals into a WeeklyInvestmentState."""

    def __init__(
        self,
        meal_source: MealHistorySource,
        *,
        clock: Clock | None = None,
        weekly_capacity: float | None = None,
    ):
        """Initialize tracker.

        Args:
            meal_source: Where meals are read from
            clock: Returns "now"; defaults to UTC wall clock
            weekly_capacity: Capacity before the first refresh (defaults to settings)
        """
        self._meal_source = meal_source
        self._clock: Clock = clock or _utc_now
        capacity = settings.default_weekly_capacity if weekly_capacity is None else weekly_capacity
        if capacity < 0:
            raise InvalidCapacityError(capacity)

        self._state = WeeklyInvestmentState(
            weekly_capacity=capacity,
            target_experiences=settings.default_target_experiences,
            week_start_date=week_start_for(self._clock()),
        )
        self._refresh_lock = asyncio.Lock()
        self._periodic_task: asyncio.Task[None] | None = None
        self._disposed = False

    @property
    def state(self) -> WeeklyInvestmentState:
        return self._state

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _publish(self, state: WeeklyInvestmentState) -> bool:
        if self._disposed:
            logger.debug("[INVESTMENT] Tracker disposed, dropping state update")
            return False
        self._state = state
        return True

    async def refresh(self, user_id: str, preferences: UserPreferences | None) -> None:
        """Reload this week's meals and publish a new snapshot.

        Failures never raise: they surface as ``state.error_message`` and the
        previous numeric fields are kept. A cancelled refresh also keeps the
        previous snapshot, with ``is_loading`` cleared, before re-raising.
        """
        if self._disposed:
            return

        async with self._refresh_lock:
            if preferences is None:
                logger.warning(f"[INVESTMENT] No preferences for user_id={user_id}, skipping refresh")
                self._publish(self._state.model_copy(update={"is_loading": False, "error_message": PREFERENCES_UNAVAILABLE_MESSAGE}))
                return

            if not self._publish(self._state.model_copy(update={"is_loading": True, "error_message": None})):
                return

            now = self._clock()
            week_start, week_end = week_bounds(now)
            logger.info(f"[INVESTMENT] Refreshing user_id={user_id} for week {week_start.date().isoformat()}")

            try:
                meals = await self._meal_source.get_meals_by_date_range(user_id, week_start, week_end)
            except asyncio.CancelledError:
                logger.info(f"[INVESTMENT] Refresh cancelled for user_id={user_id}, keeping previous snapshot")
                self._publish(self._state.model_copy(update={"is_loading": False}))
                raise
            except Exception as e:
                logger.warning(f"[INVESTMENT] Failed to load meals for user_id={user_id}: {e}")
                self._publish(self._state.model_copy(update={"is_loading": False, "error_message": load_failed_message(e)}))
                return

            current_spent = sum(meal.cost for meal in meals)
            published = self._publish(
                WeeklyInvestmentState(
                    weekly_capacity=preferences.weekly_budget,
                    current_spent=current_spent,
                    experiences_logged=len(meals),
                    target_experiences=target_experiences_for(preferences),
                    weekly_meals=tuple(meals),
                    week_start_date=week_start.date(),
                )
            )
            if published:
                logger.info(
                    f"[INVESTMENT] Refreshed user_id={user_id}: spent={current_spent:.2f} "
                    f"capacity={preferences.weekly_budget:.2f} experiences={len(meals)}"
                )

    async def update_weekly_capacity(self, value: float) -> None:
        """Set a new weekly capacity without re-fetching meals.

        Raises:
            InvalidCapacityError: If value is negative
        """
        if value < 0 or math.isnan(value):
            raise InvalidCapacityError(value)
        if self._publish(self._state.model_copy(update={"weekly_capacity": value})):
            logger.info(f"[INVESTMENT] Weekly capacity updated to {value:.2f}")

    def calculate_meal_impact(self, meal_cost: float) -> InvestmentImpact:
        return calculate_meal_impact(self._state, meal_cost)

    def meal_impact_or_none(self, meal_cost: float | None) -> InvestmentImpact | None:
        """Impact for a cost being typed; None until a positive cost is entered."""
        if meal_cost is None or meal_cost <= 0:
            return None
        return calculate_meal_impact(self._state, meal_cost)

    def start_periodic_refresh(
        self,
        user_id: str,
        preferences: UserPreferences | PreferencesProvider | None,
        interval_seconds: float | None = None,
    ) -> asyncio.Task[None] | None:
        """Refresh every ``interval_seconds`` until disposed.

        Args:
            user_id: User whose meals are loaded
            preferences: Fixed preferences, or a callable read on every tick so
                later preference changes are picked up
            interval_seconds: Seconds between refreshes (defaults to settings, 0 disables)
        """
        provider: PreferencesProvider = preferences if callable(preferences) else (lambda: preferences)

        async def refresh_tick() -> None:
            await self.refresh(user_id, provider())

        logger.debug(f"[INVESTMENT] Scheduling periodic refresh for user_id={user_id}")
        return self.run_periodically(refresh_tick, interval_seconds)

    def run_periodically(
        self,
        action: RefreshAction,
        interval_seconds: float | None = None,
    ) -> asyncio.Task[None] | None:
        """Await ``action`` every ``interval_seconds`` until disposed.

        Replaces any periodic task already running. Must be called from a
        running event loop. Returns None when the interval is 0.
        """
        self._cancel_periodic()
        interval = settings.refresh_interval_seconds if interval_seconds is None else interval_seconds
        if self._disposed or interval <= 0:
            return None

        self._periodic_task = asyncio.create_task(self._periodic_loop(action, interval))
        return self._periodic_task

    async def _periodic_loop(self, action: RefreshAction, interval: float) -> None:
        while not self._disposed:
            await asyncio.sleep(interval)
            await action()

    def _cancel_periodic(self) -> None:
        if self._periodic_task is not None and not self._periodic_task.done():
            self._periodic_task.cancel()
        self._periodic_task = None

    def dispose(self) -> None:
        """Stop periodic refresh and ignore every later completion."""
        self._disposed = True
        self._cancel_periodic()
        logger.debug("[INVESTMENT] Tracker disposed")
