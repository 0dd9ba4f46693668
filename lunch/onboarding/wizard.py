"""Budget setup wizard.

Three-step linear flow that produces the initial weekly capacity and
experience preferences:

- step 0: weekly capacity selection (needs capacity > 0)
- step 1: experience preference selection (needs at least one preference)
- step 2: celebration toggle and review (always valid)

Validation never raises; ``can_proceed`` is the signal the UI blocks on.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from lunch.config.settings import settings

FIRST_STEP = 0
LAST_STEP = 2


class BudgetSetupState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_step: int = Field(default=FIRST_STEP, ge=FIRST_STEP, le=LAST_STEP)
    weekly_capacity: float = Field(default_factory=lambda: settings.default_weekly_capacity)
    experience_preferences: frozenset[str] = frozenset()
    celebrate_achievements: bool = True
    is_completed: bool = False
    completed_at: datetime | None = None

    @property
    def can_proceed(self) -> bool:
        if self.current_step == 0:
            return self.weekly_capacity > 0
        if self.current_step == 1:
            return len(self.experience_preferences) > 0
        # Celebration setup is optional
        return True


class BudgetSetupResult(BaseModel):
    """Values handed to the preferences store and the tracker on completion."""

    model_config = ConfigDict(frozen=True)

    weekly_capacity: float
    experience_preferences: frozenset[str]
    celebrate_achievements: bool
    completed_at: datetime


class BudgetSetupWizard:
    """Owns one BudgetSetupState for the length of a setup session."""

    def __init__(self, *, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))
        self._state = BudgetSetupState()

    @property
    def state(self) -> BudgetSetupState:
        return self._state

    def _update(self, **changes: object) -> None:
        self._state = self._state.model_copy(update=changes)

    def update_weekly_capacity(self, capacity: float) -> None:
        self._update(weekly_capacity=capacity)

    def update_experience_preferences(self, preferences: Iterable[str]) -> None:
        self._update(experience_preferences=frozenset(preferences))

    def toggle_celebrations(self, celebrate: bool) -> None:
        self._update(celebrate_achievements=celebrate)

    def next_step(self) -> None:
        """Advance one step; no-op on the last step or while the current step is invalid."""
        if self._state.current_step < LAST_STEP and self._state.can_proceed:
            self._update(current_step=self._state.current_step + 1)

    def previous_step(self) -> None:
        if self._state.current_step > FIRST_STEP:
            self._update(current_step=self._state.current_step - 1)

    def complete_setup(self) -> BudgetSetupResult | None:
        """Mark setup complete and return the values to hand off.

        Only meaningful on the review step; anywhere else nothing changes and
        None is returned.
        """
        if self._state.current_step != LAST_STEP:
            logger.warning(f"[SETUP] complete_setup called on step {self._state.current_step}, ignoring")
            return None

        completed_at = self._clock()
        self._update(is_completed=True, completed_at=completed_at)
        logger.info(
            f"[SETUP] Budget setup completed: capacity={self._state.weekly_capacity:.2f} "
            f"preferences={sorted(self._state.experience_preferences)}"
        )
        return BudgetSetupResult(
            weekly_capacity=self._state.weekly_capacity,
            experience_preferences=self._state.experience_preferences,
            celebrate_achievements=self._state.celebrate_achievements,
            completed_at=completed_at,
        )

    def reset(self) -> None:
        self._state = BudgetSetupState()
