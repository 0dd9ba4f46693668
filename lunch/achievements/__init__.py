"""Gamification rules over spending and logging history."""

from lunch.achievements.catalog import CATALOG, AchievementRule
from lunch.achievements.engine import AchievementEngine
from lunch.achievements.levels import level_for_points
from lunch.achievements.models import Achievement, AchievementState

__all__ = [
    "CATALOG",
    "Achievement",
    "AchievementEngine",
    "AchievementRule",
    "AchievementState",
    "level_for_points",
]
