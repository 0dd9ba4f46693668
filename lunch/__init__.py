"""Dining investment engine.

Weekly budget tracking, prospective meal impact guidance, achievements and
the budget setup wizard that seeds them.
"""

from loguru import logger

from lunch.achievements import Achievement, AchievementEngine, AchievementState
from lunch.core.logger import setup_logger
from lunch.investment import InvestmentImpact, WeeklyInvestmentState, WeeklyInvestmentTracker, calculate_meal_impact
from lunch.meals import InMemoryMealHistorySource, Meal, MealHistorySource, MealSourceError, UserPreferences
from lunch.onboarding import BudgetSetupResult, BudgetSetupState, BudgetSetupWizard, apply_budget_setup
from lunch.session import InvestmentSession

__all__ = [
    "Achievement",
    "AchievementEngine",
    "AchievementState",
    "BudgetSetupResult",
    "BudgetSetupState",
    "BudgetSetupWizard",
    "InMemoryMealHistorySource",
    "InvestmentImpact",
    "InvestmentSession",
    "Meal",
    "MealHistorySource",
    "MealSourceError",
    "UserPreferences",
    "WeeklyInvestmentState",
    "WeeklyInvestmentTracker",
    "apply_budget_setup",
    "calculate_meal_impact",
    "setup_logger",
]

# Silent until the host application calls setup_logger().
logger.disable("lunch")
