"""Capacity classification tables.

Two independent scales are derived from the same progress ratio:
- Usage level describes raw consumption of the weekly capacity
- Guidance level is a coarser advisory signal with its own cutoffs

Impact guidance for a prospective expense is NOT taken from the guidance
table; it is looked up from the impact level (see IMPACT_GUIDANCE).
"""

from __future__ import annotations

from typing import Literal

UsageLevel = Literal["low", "moderate", "high", "very_high"]
GuidanceLevel = Literal["excellent", "good", "moderate", "high"]

# Upper bounds are exclusive; anything at or above the last bound is the top bucket.
USAGE_THRESHOLDS: tuple[tuple[float, UsageLevel], ...] = (
    (0.30, "low"),
    (0.70, "moderate"),
    (0.90, "high"),
)

GUIDANCE_THRESHOLDS: tuple[tuple[float, GuidanceLevel], ...] = (
    (0.50, "excellent"),
    (0.80, "good"),
    (0.95, "moderate"),
)

IMPACT_GUIDANCE: dict[UsageLevel, GuidanceLevel] = {
    "low": "excellent",
    "moderate": "good",
    "high": "moderate",
    "very_high": "high",
}


def capacity_ratio(spent: float, capacity: float) -> float:
    """Spent / capacity, defined as 0.0 when capacity is not positive."""
    if capacity <= 0:
        return 0.0
    return spent / capacity


def usage_level(progress: float) -> UsageLevel:
    for upper, level in USAGE_THRESHOLDS:
        if progress < upper:
            return level
    return "very_high"


def guidance_level(progress: float) -> GuidanceLevel:
    for upper, level in GUIDANCE_THRESHOLDS:
        if progress < upper:
            return level
    return "high"
