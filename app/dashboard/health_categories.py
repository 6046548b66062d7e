"""
Health score category config.

Each category contributes `weight` to the composite score, but only when it
has data (present-weighted average). Bands are checked top to bottom; the
first band whose bounds contain the value wins, otherwise `floor_score`.

  Sleep     0.30  hours, latest `sleep` metric
  Activity  0.25  steps, latest `steps` metric
  Hydration 0.20  water/hydration habit, else latest `water` metric (glasses)
  Habits    0.25  share of habits completed today
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ScoreBand:
    score: float
    lower: float  # inclusive
    upper: float | None = None  # inclusive when upper_inclusive, else exclusive
    upper_inclusive: bool = False

    def contains(self, value: float) -> bool:
        if value < self.lower:
            return False
        if self.upper is None:
            return True
        return value <= self.upper if self.upper_inclusive else value < self.upper


@dataclass(frozen=True, slots=True)
class HealthCategory:
    name: str
    weight: float
    metric_type: str | None = None
    bands: tuple[ScoreBand, ...] = field(default_factory=tuple)
    floor_score: float = 40.0


SLEEP = HealthCategory(
    name="Sleep",
    weight=0.30,
    metric_type="sleep",
    bands=(
        ScoreBand(score=100.0, lower=7.0, upper=9.0, upper_inclusive=True),
        ScoreBand(score=80.0, lower=6.0, upper=7.0),
        ScoreBand(score=60.0, lower=5.0, upper=6.0),
    ),
)

ACTIVITY = HealthCategory(
    name="Activity",
    weight=0.25,
    metric_type="steps",
    bands=(
        ScoreBand(score=100.0, lower=10000.0),
        ScoreBand(score=80.0, lower=8000.0),
        ScoreBand(score=60.0, lower=5000.0),
    ),
)

HYDRATION = HealthCategory(name="Hydration", weight=0.20, metric_type="water")

HABITS = HealthCategory(name="Habits", weight=0.25)

CATEGORIES: tuple[HealthCategory, ...] = (SLEEP, ACTIVITY, HYDRATION, HABITS)

# Hydration habit detection (case-insensitive substring of the habit name)
HYDRATION_HABIT_KEYWORDS: tuple[str, ...] = ("hydration", "water")
DAILY_WATER_GLASSES = 8.0

# Habit consistency when the user tracks no habits
HABITS_FALLBACK_SCORE = 80.0
# Composite score when there is no data at all
NO_DATA_SCORE = 75.0


def band_score(category: HealthCategory, value: float) -> float:
    for band in category.bands:
        if band.contains(value):
            return band.score
    return category.floor_score


def list_categories() -> list[HealthCategory]:
    return list(CATEGORIES)
