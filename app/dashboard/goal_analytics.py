"""Goal analytics — pure stateless functions over a goal and its entries.

Never raises: entries without a usable ``date`` or ``value`` are skipped,
every denominator is guarded. ``now`` is always passed in by the caller.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, NamedTuple

from app.dashboard.formatting import format_number, with_unit
from app.dashboard.milestones import list_milestones
from app.dashboard.models import (
    ColorCode,
    Goal,
    GoalAnalytics,
    GoalEntry,
    GoalType,
    Milestone,
)

VELOCITY_WINDOW_DAYS = 7
STREAK_WINDOW_DAYS = 30
NO_TARGET_DATE_DAYS = 365  # Horizon assumed for goals without a target date
ON_TRACK_TOLERANCE = 0.9
WEEKEND_RECENT_ENTRIES = 7
WEEKEND_MIN_ENTRIES = 3
WEEKEND_SHARE = 0.6
MAX_PROJECTION_DAYS = 36_500


class Contribution(NamedTuple):
    date: datetime
    value: float


class TimeWindow(NamedTuple):
    days_remaining: int
    total_days: int
    days_passed: int


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

def _clock(now: datetime) -> datetime:
    """Naive clocks are read as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _localize(dt: datetime, tz: tzinfo) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def _finite(value: float | None, default: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if math.isfinite(value) else default


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from `earlier` to `later`, truncated toward zero."""
    return int((later - earlier).total_seconds() / 86400)


def contributions(entries: Iterable[GoalEntry] | None, now: datetime) -> list[Contribution]:
    """Usable (date, value) pairs in `now`'s timezone, input order kept."""
    tz = _clock(now).tzinfo
    result: list[Contribution] = []
    for entry in entries or ():
        when = getattr(entry, "date", None)
        value = getattr(entry, "value", None)
        if not isinstance(when, datetime):
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            continue
        result.append(Contribution(_localize(when, tz), float(value)))
    return result


# ---------------------------------------------------------------------------
# Progress & time window
# ---------------------------------------------------------------------------

def effective_target(goal: Goal) -> float:
    """Ceiling used for remaining/expected progress: 100 for percentage goals."""
    if goal.goal_type == GoalType.percentage:
        return 100.0
    return _finite(goal.target_value)


def goal_progress_percentage(goal: Goal) -> float:
    """Percentage goals pass through; number goals are capped at 100.

    A non-positive target on a number goal counts as complete.
    """
    progress = _finite(goal.current_value)
    if goal.goal_type == GoalType.percentage:
        return progress
    target = _finite(goal.target_value)
    if target <= 0.0:
        return 100.0
    return min(progress / target * 100.0, 100.0)


def goal_time_window(goal: Goal, now: datetime) -> TimeWindow:
    now = _clock(now)
    if goal.target_date is None:
        remaining = NO_TARGET_DATE_DAYS
        total = NO_TARGET_DATE_DAYS
    else:
        target_date = _localize(goal.target_date, now.tzinfo)
        created_at = _localize(goal.created_at, now.tzinfo)
        remaining = max(0, days_between(target_date, now))
        total = days_between(target_date, created_at)
    return TimeWindow(days_remaining=remaining, total_days=total, days_passed=total - remaining)


def goal_velocity(points: list[Contribution], now: datetime, days_passed: int) -> float:
    """Average daily progress over the trailing 7-day window."""
    now = _clock(now)
    recent_sum = sum(p.value for p in points if days_between(now, p.date) <= VELOCITY_WINDOW_DAYS)
    divisor = min(VELOCITY_WINDOW_DAYS, days_passed if days_passed > 0 else 1)
    return recent_sum / divisor


def is_on_track(progress: float, target: float, window: TimeWindow) -> bool:
    expected = 0.0
    if window.days_passed > 0 and window.total_days > 0:
        expected = (window.days_passed / window.total_days) * target
    return progress >= expected * ON_TRACK_TOLERANCE


def goal_color_code(progress_pct: float, on_track: bool, window: TimeWindow) -> ColorCode:
    """Red (behind with under half the time left) wins over amber."""
    if progress_pct < 50.0 and window.days_remaining < window.total_days * 0.5:
        return ColorCode.red
    if not on_track:
        return ColorCode.amber
    return ColorCode.green


# ---------------------------------------------------------------------------
# Streak & milestones
# ---------------------------------------------------------------------------

def goal_streak(points: list[Contribution], now: datetime) -> int:
    """Consecutive days with an entry, counting back from today.

    Today may be empty without breaking the streak.
    """
    if not points:
        return 0
    today: date = _clock(now).date()
    days_with_entries = {p.date.date() for p in points}

    streak = 0
    for offset in range(STREAK_WINDOW_DAYS):
        if today - timedelta(days=offset) in days_with_entries:
            streak += 1
        elif offset > 0:
            break
    return streak


def goal_milestones(
    goal: Goal,
    points: list[Contribution],
    progress_pct: float,
    now: datetime | None = None,
) -> list[Milestone]:
    """Fixed thresholds; reached ones get the date the entry replay first crossed them.

    The replay starts from whatever part of ``current_value`` the entries do
    not account for (zero when the running-sum invariant holds). A threshold
    already met by that offset dates from the goal's creation.
    """
    target = effective_target(goal)
    ascending = sorted(points, key=lambda p: p.date)
    offset = _finite(goal.current_value) - sum(p.value for p in points)
    created_at = _localize(goal.created_at, _clock(now).tzinfo) if now is not None else goal.created_at

    milestones: list[Milestone] = []
    for definition in list_milestones():
        if progress_pct < definition.percentage:
            milestones.append(Milestone(percentage=definition.percentage))
            continue

        threshold = definition.percentage / 100.0 * target
        reached_on: datetime | None = None
        cumulative = offset
        if cumulative >= threshold:
            reached_on = created_at
        else:
            for point in ascending:
                cumulative += point.value
                if cumulative >= threshold:
                    reached_on = point.date
                    break

        milestones.append(
            Milestone(
                percentage=definition.percentage,
                reached=True,
                date=reached_on,
                celebration=definition.celebration,
            )
        )
    return milestones


# ---------------------------------------------------------------------------
# Insights & suggestions
# ---------------------------------------------------------------------------

def goal_insights(
    goal: Goal,
    points: list[Contribution],
    velocity: float,
    on_track: bool,
    streak: int,
) -> list[str]:
    insights: list[str] = []

    if streak >= 7:
        insights.append(f"Amazing {streak}-day streak! You're building incredible momentum.")
    elif streak >= 3:
        insights.append(f"{streak} days in a row! Keep the momentum going.")

    if velocity > 0:
        weekly = with_unit(f"{velocity * 7:.1f}", goal.unit)
        insights.append(f"You're averaging {weekly} per week.")

    if on_track:
        insights.append("You're on track to reach your goal on time!")
    else:
        insights.append("You're falling behind schedule. Consider adjusting your daily target.")

    recent = sorted(points, key=lambda p: p.date, reverse=True)[:WEEKEND_RECENT_ENTRIES]
    if len(recent) >= WEEKEND_MIN_ENTRIES:
        weekend = sum(1 for p in recent if p.date.weekday() >= 5)
        if weekend > len(recent) * WEEKEND_SHARE:
            insights.append("You're more productive on weekends! Consider planning more activities then.")

    return insights


def goal_suggestions(
    goal: Goal,
    velocity: float,
    daily_target_remaining: float,
    on_track: bool,
    days_remaining: int,
) -> list[str]:
    suggestions: list[str] = []

    if not on_track and days_remaining > 0:
        gap = daily_target_remaining - velocity
        increase = math.ceil(gap) if math.isfinite(gap) else 0
        if increase > 0:
            amount = with_unit(format_number(increase), goal.unit)
            suggestions.append(f"Increase your daily average by {amount} to finish on time.")

    if velocity == 0 and days_remaining > 0:
        suggestions.append(f"Start with small wins! Aim for just {with_unit('1-2', goal.unit)} today.")

    if velocity > daily_target_remaining and on_track:
        suggestions.append("You're ahead of schedule! Consider raising your target or setting a new goal.")

    if days_remaining < 30 and not on_track:
        suggestions.append("Less than a month left! Focus on consistency over perfection.")

    if velocity > daily_target_remaining * 3:
        suggestions.append("You're working very hard! Consider taking a rest day to avoid burnout.")

    return suggestions


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def compute_goal_analytics(
    goal: Goal,
    entries: Iterable[GoalEntry] | None,
    now: datetime,
) -> GoalAnalytics:
    """Full analytics report for one goal at instant `now`."""
    now = _clock(now)
    points = contributions(entries, now)

    progress = _finite(goal.current_value)
    progress_pct = goal_progress_percentage(goal)
    target = effective_target(goal)

    window = goal_time_window(goal, now)
    velocity = goal_velocity(points, now, window.days_passed)

    remaining_value = target - progress
    daily_target_remaining = remaining_value / window.days_remaining if window.days_remaining > 0 else 0.0

    # Clamp before ceil: a tiny velocity can push the ratio to inf
    if velocity > 0:
        projected_days = remaining_value / velocity
    else:
        projected_days = window.days_remaining * 2
    projected_days = math.ceil(max(-MAX_PROJECTION_DAYS, min(MAX_PROJECTION_DAYS, projected_days)))

    on_track = is_on_track(progress, target, window)
    streak = goal_streak(points, now)

    return GoalAnalytics(
        progress=progress,
        progress_percentage=progress_pct,
        is_on_track=on_track,
        days_remaining=window.days_remaining,
        daily_target_remaining=daily_target_remaining,
        projected_completion_date=now + timedelta(days=projected_days),
        velocity=velocity,
        streak=streak,
        milestones=goal_milestones(goal, points, progress_pct, now),
        color_code=goal_color_code(progress_pct, on_track, window),
        insights=goal_insights(goal, points, velocity, on_track, streak),
        suggestions=goal_suggestions(goal, velocity, daily_target_remaining, on_track, window.days_remaining),
    )


def format_goal_progress(goal: Goal) -> str:
    """Display string: "75%" for percentage goals, "6/24 books" for number goals."""
    current = format_number(_finite(goal.current_value))
    if goal.goal_type == GoalType.percentage:
        return f"{current}%"
    target = format_number(_finite(goal.target_value))
    return with_unit(f"{current}/{target}", goal.unit)
