"""Achievement catalog.

Each rule pairs a catalog entry with a predicate over the latest weekly state
and the full meal history. Rules are data: the engine loops over CATALOG and
never branches on achievement ids.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from lunch.achievements.models import Achievement
from lunch.investment.models import WeeklyInvestmentState
from lunch.investment.tracker import week_start_for
from lunch.meals.models import Meal

Predicate = Callable[[WeeklyInvestmentState, Sequence[Meal]], bool]

WEEK_OPTIMIZER_MAX_PROGRESS = 0.80
WEEK_OPTIMIZER_MIN_EXPERIENCES = 5
EXPLORER_MIN_MEAL_TYPES = 5
CONSISTENT_TRACKER_DAYS = 7
SMART_SPENDER_WEEKS = 4
SMART_SPENDER_MAX_PROGRESS = 0.80


@dataclass(frozen=True)
class AchievementRule:
    """Catalog entry plus its unlock condition."""

    achievement: Achievement
    predicate: Predicate

    @property
    def id(self) -> str:
        return self.achievement.id

    def is_satisfied(self, state: WeeklyInvestmentState, meals: Sequence[Meal]) -> bool:
        return self.predicate(state, meals)


# -------------------------------------------------------------------
# Predicates (PURE FUNCTIONS)
# -------------------------------------------------------------------


def has_any_meal(_state: WeeklyInvestmentState, meals: Sequence[Meal]) -> bool:
    return len(meals) > 0


def optimized_week(state: WeeklyInvestmentState, _meals: Sequence[Meal]) -> bool:
    return (
        state.weekly_capacity > 0
        and state.current_spent / state.weekly_capacity < WEEK_OPTIMIZER_MAX_PROGRESS
        and state.experiences_logged >= WEEK_OPTIMIZER_MIN_EXPERIENCES
    )


def explored_meal_types(_state: WeeklyInvestmentState, meals: Sequence[Meal]) -> bool:
    return len({meal.meal_type for meal in meals}) >= EXPLORER_MIN_MEAL_TYPES


def longest_daily_streak(meals: Sequence[Meal]) -> int:
    """Longest run of consecutive calendar days with at least one meal."""
    days = sorted({meal.date.date() for meal in meals})
    if not days:
        return 0

    longest = current = 1
    for previous, day in zip(days, days[1:]):
        current = current + 1 if day - previous == timedelta(days=1) else 1
        longest = max(longest, current)
    return longest


def consistent_tracking(_state: WeeklyInvestmentState, meals: Sequence[Meal]) -> bool:
    if len(meals) < CONSISTENT_TRACKER_DAYS:
        return False
    return longest_daily_streak(meals) >= CONSISTENT_TRACKER_DAYS


def weekly_spend(meals: Sequence[Meal]) -> dict[date, float]:
    """Total spend per Monday-based week, keyed by week start."""
    totals: dict[date, float] = defaultdict(float)
    for meal in meals:
        totals[week_start_for(meal.date)] += meal.cost
    return dict(totals)


def smart_month(state: WeeklyInvestmentState, meals: Sequence[Meal]) -> bool:
    """Four consecutive logged weeks, each under 80% of the weekly capacity."""
    if state.weekly_capacity <= 0 or not meals:
        return False

    ceiling = state.weekly_capacity * SMART_SPENDER_MAX_PROGRESS
    run = 0
    previous: date | None = None
    for week_start, spent in sorted(weekly_spend(meals).items()):
        if spent >= ceiling:
            run = 0
        elif previous is not None and week_start - previous == timedelta(days=7) and run > 0:
            run += 1
        else:
            run = 1
        previous = week_start
        if run >= SMART_SPENDER_WEEKS:
            return True
    return False


# -------------------------------------------------------------------
# Catalog (order is evaluation order)
# -------------------------------------------------------------------

CATALOG: tuple[AchievementRule, ...] = (
    AchievementRule(
        achievement=Achievement(
            id="first_experience",
            title="First Investment",
            description="Log your first dining experience",
            category="Getting Started",
            points=10,
            icon_name="celebration",
        ),
        predicate=has_any_meal,
    ),
    AchievementRule(
        achievement=Achievement(
            id="week_optimizer",
            title="Weekly Optimizer",
            description="Stay within 80% of weekly capacity with at least 5 experiences",
            category="Budget Management",
            points=25,
            icon_name="eco",
        ),
        predicate=optimized_week,
    ),
    AchievementRule(
        achievement=Achievement(
            id="experience_explorer",
            title="Experience Explorer",
            description="Try 5 different types of dining experiences",
            category="Diversity",
            points=20,
            icon_name="explore",
        ),
        predicate=explored_meal_types,
    ),
    AchievementRule(
        achievement=Achievement(
            id="consistent_tracker",
            title="Consistent Tracker",
            description="Log experiences for 7 consecutive days",
            category="Consistency",
            points=30,
            icon_name="calendar_today",
        ),
        predicate=consistent_tracking,
    ),
    AchievementRule(
        achievement=Achievement(
            id="smart_spender",
            title="Smart Investor",
            description="Complete a month with optimal investment distribution",
            category="Budget Management",
            points=50,
            icon_name="psychology",
        ),
        predicate=smart_month,
    ),
)


def catalog_achievements(rules: Sequence[AchievementRule] = CATALOG) -> tuple[Achievement, ...]:
    return tuple(rule.achievement for rule in rules)
