"""Weekly dining-investment tracking.

This module provides:
- WeeklyInvestmentState snapshot with derived usage/guidance levels
- Side-effect-free impact classification for a prospective expense
- WeeklyInvestmentTracker, the only writer of the weekly state
"""

from lunch.investment.errors import InvalidCapacityError
from lunch.investment.impact import calculate_meal_impact
from lunch.investment.levels import GuidanceLevel, UsageLevel, guidance_level, usage_level
from lunch.investment.models import InvestmentImpact, WeeklyInvestmentState
from lunch.investment.tracker import WeeklyInvestmentTracker, week_bounds, week_start_for

__all__ = [
    "GuidanceLevel",
    "InvalidCapacityError",
    "InvestmentImpact",
    "UsageLevel",
    "WeeklyInvestmentState",
    "WeeklyInvestmentTracker",
    "calculate_meal_impact",
    "guidance_level",
    "usage_level",
    "week_bounds",
    "week_start_for",
]
