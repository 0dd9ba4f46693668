"""Hand a completed budget setup to its consumers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from loguru import logger

from lunch.investment.tracker import WeeklyInvestmentTracker
from lunch.onboarding.wizard import BudgetSetupResult


class PreferencesStore(Protocol):
    """Write side of the user preferences store."""

    async def update_weekly_budget(self, weekly_budget: float) -> None: ...

    async def update_experience_preferences(self, preferences: Iterable[str]) -> None: ...


async def apply_budget_setup(
    result: BudgetSetupResult,
    *,
    preferences_store: PreferencesStore,
    tracker: WeeklyInvestmentTracker | None = None,
) -> None:
    """Persist the setup through the preferences store and seed the tracker.

    Store errors propagate to the caller; the tracker is only updated once the
    store has accepted the budget.
    """
    await preferences_store.update_weekly_budget(result.weekly_capacity)
    await preferences_store.update_experience_preferences(sorted(result.experience_preferences))

    if tracker is not None:
        await tracker.update_weekly_capacity(result.weekly_capacity)

    logger.info(f"[SETUP] Applied budget setup: capacity={result.weekly_capacity:.2f}")
