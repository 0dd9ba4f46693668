"""Meal history value objects and the source interface."""

from lunch.meals.errors import MealSourceError
from lunch.meals.models import Meal, UserPreferences
from lunch.meals.source import InMemoryMealHistorySource, MealHistorySource

__all__ = [
    "InMemoryMealHistorySource",
    "Meal",
    "MealHistorySource",
    "MealSourceError",
    "UserPreferences",
]
