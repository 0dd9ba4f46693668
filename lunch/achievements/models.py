from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lunch.achievements.levels import level_for_points


class Achievement(BaseModel):
    """Catalog entry, or an unlocked copy of one (is_unlocked + unlocked_at set)."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    category: str
    points: int = Field(..., gt=0)
    icon_name: str
    is_unlocked: bool = False
    unlocked_at: datetime | None = None

    def unlock(self, at: datetime) -> "Achievement":
        return self.model_copy(update={"is_unlocked": True, "unlocked_at": at})


class AchievementState(BaseModel):
    """Append-only unlock ledger plus the catalog it is evaluated against.

    Attributes:
        unlocked_achievements: Unlocked entries in unlock order, unique by id
        available_achievements: The fixed catalog
        latest_achievement: Most recent unlock until dismissed
    """

    model_config = ConfigDict(frozen=True)

    unlocked_achievements: tuple[Achievement, ...] = ()
    available_achievements: tuple[Achievement, ...] = ()
    latest_achievement: Achievement | None = None

    @property
    def unlocked_ids(self) -> frozenset[str]:
        return frozenset(a.id for a in self.unlocked_achievements)

    @property
    def total_points(self) -> int:
        return sum(a.points for a in self.unlocked_achievements)

    @property
    def current_level(self) -> str:
        return level_for_points(self.total_points)
