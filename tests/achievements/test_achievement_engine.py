"""Tests for the achievement engine and its rule catalog."""

import datetime as dt
import time

import pytest

from lunch.achievements.catalog import (
    CATALOG,
    AchievementRule,
    consistent_tracking,
    explored_meal_types,
    longest_daily_streak,
    optimized_week,
    smart_month,
    weekly_spend,
)
from lunch.achievements.engine import AchievementEngine
from lunch.achievements.levels import LEVEL_ORDER, level_for_points
from lunch.achievements.models import Achievement
from lunch.investment.models import WeeklyInvestmentState
from lunch.meals.models import Meal

MEAL_TYPES = ["breakfast", "lunch", "dinner", "delivery", "takeout", "snack", "dining_out"]


def make_state(*, spent: float = 0.0, capacity: float = 200.0, experiences: int = 0) -> WeeklyInvestmentState:
    return WeeklyInvestmentState(
        weekly_capacity=capacity,
        current_spent=spent,
        experiences_logged=experiences,
        week_start_date=dt.date(2024, 1, 1),
    )


@pytest.fixture
def engine(clock) -> AchievementEngine:
    return AchievementEngine(clock=clock)


def test_catalog_has_five_unique_entries():
    ids = [rule.id for rule in CATALOG]

    assert len(ids) == 5
    assert len(set(ids)) == 5
    assert all(rule.achievement.points > 0 for rule in CATALOG)
    assert all(not rule.achievement.is_unlocked for rule in CATALOG)


def test_initial_state(engine):
    state = engine.state

    assert state.unlocked_achievements == ()
    assert len(state.available_achievements) == 5
    assert state.total_points == 0
    assert state.current_level == "Beginner"
    assert state.latest_achievement is None


def test_single_meal_unlocks_only_first_experience(engine, make_meal, fixed_now):
    meals = [make_meal(cost=12.5)]

    unlocked = engine.check_achievements(make_state(spent=12.5, experiences=1), meals)

    assert [a.id for a in unlocked] == ["first_experience"]
    assert [a.id for a in engine.state.unlocked_achievements] == ["first_experience"]
    assert engine.state.total_points == 10
    latest = engine.state.latest_achievement
    assert latest is not None
    assert latest.id == "first_experience"
    assert latest.is_unlocked is True
    assert latest.unlocked_at == fixed_now


def test_no_meals_unlocks_nothing(engine):
    assert engine.check_achievements(make_state(), []) == ()
    assert engine.state.total_points == 0


def test_check_is_idempotent(engine, make_meal):
    meals = [make_meal(meal_type=t, days_ago=i) for i, t in enumerate(MEAL_TYPES)]
    state = make_state(spent=60.0, experiences=5)

    engine.check_achievements(state, meals)
    points = engine.state.total_points
    ids = [a.id for a in engine.state.unlocked_achievements]

    assert engine.check_achievements(state, meals) == ()
    assert engine.state.total_points == points
    assert [a.id for a in engine.state.unlocked_achievements] == ids
    assert len(ids) == len(set(ids))


def test_unlocks_are_never_revoked(engine, make_meal):
    engine.check_achievements(make_state(spent=10.0, experiences=1), [make_meal()])

    engine.check_achievements(make_state(), [])

    assert engine.state.unlocked_ids == {"first_experience"}


def test_multiple_unlocks_keep_catalog_order(engine, make_meal):
    meals = [make_meal(meal_type=t) for t in MEAL_TYPES[:5]]

    unlocked = engine.check_achievements(make_state(spent=60.0, experiences=5), meals)

    assert [a.id for a in unlocked] == ["first_experience", "week_optimizer", "experience_explorer"]
    assert engine.state.latest_achievement.id == "experience_explorer"
    assert engine.state.total_points == 10 + 25 + 20


@pytest.mark.parametrize(
    ("spent", "capacity", "experiences", "expected"),
    [
        (100.0, 200.0, 5, True),
        (159.0, 200.0, 6, True),
        (160.0, 200.0, 5, False),  # exactly 80% does not qualify
        (100.0, 200.0, 4, False),
        (0.0, 0.0, 5, False),
    ],
)
def test_week_optimizer_rule(spent, capacity, experiences, expected):
    state = make_state(spent=spent, capacity=capacity, experiences=experiences)

    assert optimized_week(state, []) is expected


def test_experience_explorer_needs_five_distinct_types(make_meal):
    four_types = [make_meal(meal_type=t) for t in MEAL_TYPES[:4] * 3]
    five_types = four_types + [make_meal(meal_type=MEAL_TYPES[4])]

    assert explored_meal_types(make_state(), four_types) is False
    assert explored_meal_types(make_state(), five_types) is True


def test_longest_daily_streak(make_meal):
    meals = [make_meal(days_ago=d) for d in (0, 1, 1, 2, 5, 6, 7, 8)]

    assert longest_daily_streak(meals) == 4
    assert longest_daily_streak([]) == 0


def test_consistent_tracker_needs_seven_consecutive_days(make_meal):
    week = [make_meal(days_ago=d) for d in range(7)]
    gap = [make_meal(days_ago=d) for d in (0, 1, 2, 4, 5, 6, 7)]

    assert consistent_tracking(make_state(), week) is True
    assert consistent_tracking(make_state(), gap) is False


def test_consistent_tracker_uses_history_outside_current_week(engine, make_meal):
    old_streak = [make_meal(days_ago=d) for d in range(30, 37)]

    engine.check_achievements(make_state(), old_streak)

    assert "consistent_tracker" in engine.state.unlocked_ids


def test_weekly_spend_groups_by_monday(make_meal):
    meals = [make_meal(cost=10.0, days_ago=0), make_meal(cost=5.0, days_ago=2), make_meal(cost=7.0, days_ago=3)]

    assert weekly_spend(meals) == {dt.date(2024, 1, 1): 15.0, dt.date(2023, 12, 25): 7.0}


def test_smart_spender_four_consecutive_weeks_under_budget(make_meal):
    meals = [make_meal(cost=100.0, days_ago=7 * w) for w in range(4)]

    assert smart_month(make_state(), meals) is True


def test_smart_spender_broken_by_expensive_week(make_meal):
    meals = [make_meal(cost=100.0, days_ago=7 * w) for w in range(4)]
    meals.append(make_meal(cost=70.0, days_ago=14))  # that week reaches 170

    assert smart_month(make_state(), meals) is False


def test_smart_spender_broken_by_missing_week(make_meal):
    meals = [make_meal(cost=50.0, days_ago=7 * w) for w in (0, 1, 3, 4)]

    assert smart_month(make_state(), meals) is False
    assert smart_month(make_state(capacity=0.0), meals) is False


def test_full_history_unlocks_everything(engine, make_meal):
    meals = [make_meal(cost=10.0, days_ago=d, meal_type=MEAL_TYPES[d % len(MEAL_TYPES)]) for d in range(28)]

    engine.check_achievements(make_state(spent=30.0, experiences=5), meals)

    assert engine.state.unlocked_ids == {rule.id for rule in CATALOG}
    assert engine.state.total_points == 135
    assert engine.state.current_level == "Explorer"


@pytest.mark.parametrize(
    ("points", "level"),
    [
        (0, "Beginner"),
        (49, "Beginner"),
        (50, "Explorer"),
        (149, "Explorer"),
        (150, "Optimizer"),
        (299, "Optimizer"),
        (300, "Expert"),
        (499, "Expert"),
        (500, "Master"),
        (10_000, "Master"),
    ],
)
def test_level_ladder(points, level):
    assert level_for_points(points) == level


def test_level_ladder_is_monotonic():
    ranks = [LEVEL_ORDER.index(level_for_points(p)) for p in range(0, 700)]

    assert ranks == sorted(ranks)


def test_dismiss_latest_achievement_only_clears_latest(engine, make_meal):
    engine.check_achievements(make_state(spent=10.0, experiences=1), [make_meal()])

    engine.dismiss_latest_achievement()

    assert engine.state.latest_achievement is None
    assert engine.state.unlocked_ids == {"first_experience"}
    assert engine.state.total_points == 10


def test_duplicate_rule_ids_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        AchievementEngine(rules=(CATALOG[0], CATALOG[0]))


def test_catalog_can_be_extended_without_touching_the_engine(clock, make_meal):
    big_spender = AchievementRule(
        achievement=Achievement(
            id="big_night",
            title="Big Night Out",
            description="Log a single experience over 100",
            category="Celebration",
            points=15,
            icon_name="star",
        ),
        predicate=lambda _state, meals: any(m.cost > 100 for m in meals),
    )
    engine = AchievementEngine(rules=(*CATALOG, big_spender), clock=clock)

    engine.check_achievements(make_state(), [make_meal(cost=120.0)])

    assert engine.state.unlocked_ids == {"first_experience", "big_night"}
    assert engine.state.total_points == 25


def test_large_history_evaluates_quickly(engine, fixed_now):
    meals = [
        Meal(
            meal_type=MEAL_TYPES[i % len(MEAL_TYPES)],
            cost=float(i % 40),
            date=fixed_now - dt.timedelta(days=i % 900, hours=i % 5),
        )
        for i in range(1000)
    ]
    state = make_state(spent=80.0, experiences=6)

    start = time.perf_counter()
    engine.check_achievements(state, meals)
    engine.check_achievements(state, meals)
    elapsed = time.perf_counter() - start

    assert elapsed < 0.1
