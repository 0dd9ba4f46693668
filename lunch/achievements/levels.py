"""Level ladder derived from total achievement points.

Upper bounds are exclusive. The ladder is monotonic: more points never
yields an earlier level.
"""

LEVEL_LADDER: tuple[tuple[int, str], ...] = (
    (50, "Beginner"),
    (150, "Explorer"),
    (300, "Optimizer"),
    (500, "Expert"),
)
TOP_LEVEL = "Master"

LEVEL_ORDER: tuple[str, ...] = (*(label for _, label in LEVEL_LADDER), TOP_LEVEL)


def level_for_points(points: int) -> str:
    for upper, label in LEVEL_LADDER:
        if points < upper:
            return label
    return TOP_LEVEL
