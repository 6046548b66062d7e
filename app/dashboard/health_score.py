"""Composite health score — pure, present-weighted average, never raises."""

from __future__ import annotations

import math
from typing import Iterable

from app.dashboard import health_categories as hc
from app.dashboard.formatting import format_number
from app.dashboard.models import Habit, HabitType, HealthCategoryScore, HealthMetric, HealthScore


def _clamp(score: float) -> float:
    return max(0.0, min(score, 100.0))


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def latest_metric(metrics: list[HealthMetric], metric_type: str) -> HealthMetric | None:
    """Most recently added metric of `metric_type` (last in input order)."""
    for metric in reversed(metrics):
        if metric.type == metric_type:
            return metric
    return None


def _usable_metrics(metrics: Iterable[HealthMetric] | None) -> list[HealthMetric]:
    usable: list[HealthMetric] = []
    for metric in metrics or ():
        value = getattr(metric, "value", None)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            continue
        usable.append(metric)
    return usable


def find_hydration_habit(habits: list[Habit]) -> Habit | None:
    for habit in habits:
        name = (habit.name or "").lower()
        if any(keyword in name for keyword in hc.HYDRATION_HABIT_KEYWORDS):
            return habit
    return None


def is_habit_completed(habit: Habit) -> bool:
    if habit.completed_today:
        return True
    return habit.type == HabitType.counter and habit.current_value >= habit.target_value


# ---------------------------------------------------------------------------
# Per-category scores (None when the category has no data)
# ---------------------------------------------------------------------------

def sleep_score(metrics: list[HealthMetric]) -> HealthCategoryScore | None:
    latest = latest_metric(metrics, hc.SLEEP.metric_type)
    if latest is None:
        return None
    hours = latest.value
    return HealthCategoryScore(
        category=hc.SLEEP.name,
        score=hc.band_score(hc.SLEEP, hours),
        details=f"{format_number(hours)}h (optimal: 7-9h)",
    )


def activity_score(metrics: list[HealthMetric]) -> HealthCategoryScore | None:
    latest = latest_metric(metrics, hc.ACTIVITY.metric_type)
    if latest is None:
        return None
    steps = latest.value
    return HealthCategoryScore(
        category=hc.ACTIVITY.name,
        score=hc.band_score(hc.ACTIVITY, steps),
        details=f"{format_number(steps)} steps (target: 10,000)",
    )


def hydration_score(metrics: list[HealthMetric], habits: list[Habit]) -> HealthCategoryScore | None:
    """Hydration habit wins over the latest water metric."""
    habit = find_hydration_habit(habits)
    if habit is not None:
        if habit.target_value > 0:
            score = habit.current_value / habit.target_value * 100.0
        else:
            score = 100.0
        return HealthCategoryScore(
            category=hc.HYDRATION.name,
            score=_clamp(score),
            details=f"{habit.current_value}/{habit.target_value} glasses",
        )

    latest = latest_metric(metrics, hc.HYDRATION.metric_type)
    if latest is None:
        return None
    glasses = latest.value
    return HealthCategoryScore(
        category=hc.HYDRATION.name,
        score=_clamp(glasses / hc.DAILY_WATER_GLASSES * 100.0),
        details=f"{format_number(glasses)}/{format_number(hc.DAILY_WATER_GLASSES)} glasses",
    )


def habits_score(habits: list[Habit]) -> HealthCategoryScore:
    """Share of habits completed today; never skipped, falls back to 80."""
    completed = sum(1 for h in habits if is_habit_completed(h))
    if habits:
        score = completed / len(habits) * 100.0
    else:
        score = hc.HABITS_FALLBACK_SCORE
    return HealthCategoryScore(
        category=hc.HABITS.name,
        score=score,
        details=f"{completed}/{len(habits)} completed today",
    )


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def compute_health_score(
    metrics: Iterable[HealthMetric] | None,
    habits: Iterable[Habit] | None,
) -> HealthScore:
    """Weighted average over the categories that have data.

    Without any metrics or habits the score is 75 and the breakdown empty.
    """
    metrics = _usable_metrics(metrics)
    habits = [h for h in habits or () if h is not None]

    if not metrics and not habits:
        return HealthScore(score=hc.NO_DATA_SCORE, breakdown=[])

    weighted = (
        (hc.SLEEP.weight, sleep_score(metrics)),
        (hc.ACTIVITY.weight, activity_score(metrics)),
        (hc.HYDRATION.weight, hydration_score(metrics, habits)),
        (hc.HABITS.weight, habits_score(habits)),
    )

    breakdown: list[HealthCategoryScore] = []
    total_score = 0.0
    total_weight = 0.0
    for weight, category in weighted:
        if category is None:
            continue
        breakdown.append(category)
        total_score += category.score * weight
        total_weight += weight

    final = total_score / total_weight if total_weight > 0 else hc.NO_DATA_SCORE
    return HealthScore(score=_round_half_up(_clamp(final)), breakdown=breakdown)


def health_score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Very Good"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Fair"
    return "Needs Improvement"
