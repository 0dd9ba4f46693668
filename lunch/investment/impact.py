"""Prospective expense classifier.

Answers "what happens if I log this expense now?" from a state snapshot.
Pure: no I/O, no logging, no mutation. Safe to call on every keystroke.
"""

from __future__ import annotations

import math

from lunch.investment.levels import IMPACT_GUIDANCE, UsageLevel, usage_level
from lunch.investment.models import InvestmentImpact, WeeklyInvestmentState

IMPACT_MESSAGES: dict[UsageLevel, str] = {
    "low": "Perfect! This investment keeps you well within your comfort zone.",
    "moderate": "Great balance between enjoyment and your weekly investment goals.",
    "high": "This is a special experience. Make sure it aligns with your priorities.",
    "very_high": "This investment uses nearly all of your weekly capacity. Consider adjusting the amount.",
}

EXCEEDS_CAPACITY_MESSAGE = "This investment will exceed your weekly capacity. Consider adjusting the amount."


def projected_ratio(projected_spent: float, weekly_capacity: float) -> float:
    """Projected spend over capacity.

    With no capacity any positive spend is treated as unbounded usage.
    """
    if weekly_capacity > 0:
        return projected_spent / weekly_capacity
    return math.inf if projected_spent > 0 else 0.0


def calculate_meal_impact(state: WeeklyInvestmentState, meal_cost: float) -> InvestmentImpact:
    """Classify the impact of adding ``meal_cost`` to the week in ``state``.

    Args:
        state: Current weekly snapshot (not modified)
        meal_cost: Cost of the prospective meal

    Returns:
        InvestmentImpact with projected figures, impact/guidance levels and message

    Raises:
        ValueError: If meal_cost is negative or not a number
    """
    if meal_cost < 0 or math.isnan(meal_cost):
        raise ValueError(f"Meal cost must be >= 0, got {meal_cost}")

    projected_spent = state.current_spent + meal_cost
    exceeds_capacity = projected_spent > state.weekly_capacity
    impact_level = usage_level(projected_ratio(projected_spent, state.weekly_capacity))

    return InvestmentImpact(
        meal_cost=meal_cost,
        projected_spent=projected_spent,
        projected_remaining=max(0.0, state.weekly_capacity - projected_spent),
        impact_level=impact_level,
        guidance_level=IMPACT_GUIDANCE[impact_level],
        message=EXCEEDS_CAPACITY_MESSAGE if exceeds_capacity else IMPACT_MESSAGES[impact_level],
        exceeds_capacity=exceeds_capacity,
    )
