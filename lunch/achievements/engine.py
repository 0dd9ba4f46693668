"""Achievement evaluation engine.

Keeps an append-only unlock ledger. Evaluation is synchronous and performs
no I/O; re-running it with the same inputs is a no-op.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from threading import Lock

from loguru import logger

from lunch.achievements.catalog import CATALOG, AchievementRule, catalog_achievements
from lunch.achievements.models import Achievement, AchievementState
from lunch.investment.models import WeeklyInvestmentState
from lunch.meals.models import Meal


class AchievementEngine:
    """Evaluates the rule catalog against weekly state and meal history.

    Thread-safe: concurrent checks serialize on an internal lock, and since
    unlocks only ever grow the ledger, evaluation order does not change the
    final set.
    """

    def __init__(
        self,
        rules: Sequence[AchievementRule] = CATALOG,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize engine.

        Args:
            rules: Rule catalog, evaluated in order
            clock: Timestamp source for unlocked_at (defaults to UTC now)

        Raises:
            ValueError: If two rules share an id
        """
        ids = [rule.id for rule in rules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate achievement ids in catalog: {duplicates}")

        self._rules = tuple(rules)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._state = AchievementState(available_achievements=catalog_achievements(self._rules))
        self._lock = Lock()

    @property
    def state(self) -> AchievementState:
        return self._state

    def check_achievements(self, state: WeeklyInvestmentState, meals: Sequence[Meal]) -> tuple[Achievement, ...]:
        """Unlock every catalog entry whose rule is now satisfied.

        Args:
            state: Latest weekly investment snapshot
            meals: Full available meal history (not just this week)

        Returns:
            Achievements unlocked by this call, in catalog order
        """
        with self._lock:
            unlocked_ids = self._state.unlocked_ids
            pending = [rule for rule in self._rules if rule.id not in unlocked_ids]
            if not pending:
                return ()

            now = self._clock()
            newly_unlocked = tuple(rule.achievement.unlock(now) for rule in pending if rule.is_satisfied(state, meals))
            if not newly_unlocked:
                return ()

            self._state = self._state.model_copy(
                update={
                    "unlocked_achievements": self._state.unlocked_achievements + newly_unlocked,
                    "latest_achievement": newly_unlocked[-1],
                }
            )

        for achievement in newly_unlocked:
            logger.info(f"[ACHIEVEMENTS] Unlocked {achievement.id} (+{achievement.points} pts)")
        logger.info(f"[ACHIEVEMENTS] Total points={self._state.total_points} level={self._state.current_level}")
        return newly_unlocked

    def dismiss_latest_achievement(self) -> None:
        """Clear the pending celebration; the ledger is untouched."""
        with self._lock:
            self._state = self._state.model_copy(update={"latest_achievement": None})
