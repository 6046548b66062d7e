"""Dashboard builder — the aggregation endpoint's core.

Reads one snapshot from the store, runs the health score engine once and
goal analytics once per active goal, derives the headline stats.
Graceful degradation: an empty store still yields a full envelope.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from app.dashboard.goal_analytics import compute_goal_analytics, format_goal_progress
from app.dashboard.health_score import compute_health_score, health_score_label
from app.dashboard.models import (
    DashboardEnvelope,
    DashboardStats,
    GoalAnalytics,
    GoalCard,
    Habit,
    HealthScore,
    Task,
)
from app.store import MemStorage

logger = logging.getLogger(__name__)


def build_stats(
    tasks: list[Task],
    habits: list[Habit],
    health: HealthScore,
    analytics: list[GoalAnalytics],
) -> DashboardStats:
    completed = sum(1 for t in tasks if t.completed)
    total = len(tasks)
    focus_pct = math.floor(completed / total * 100 + 0.5) if total > 0 else 0
    longest_streak = max((h.streak for h in habits), default=0)

    return DashboardStats(
        focus=f"{completed}/{total}",
        focus_percentage=focus_pct,
        longest_streak=longest_streak,
        health_score=health.score,
        health_label=health_score_label(health.score),
        insights=sum(len(a.insights) for a in analytics),
    )


def build_goal_cards(store: MemStorage, user_id: str, now: datetime) -> list[GoalCard]:
    """Archived goals are listed without analytics."""
    cards: list[GoalCard] = []
    for goal in store.get_goals(user_id):
        analytics = None
        if not goal.is_archived:
            analytics = compute_goal_analytics(goal, store.get_goal_entries(goal.id), now)
        cards.append(GoalCard(goal=goal, display=format_goal_progress(goal), analytics=analytics))
    return cards


def build_health_score(store: MemStorage, user_id: str) -> HealthScore:
    return compute_health_score(store.get_health_metrics(user_id), store.get_habits(user_id))


def build_dashboard(
    store: MemStorage,
    user_id: str,
    now: datetime,
    notes_limit: int = 5,
) -> DashboardEnvelope:
    tasks = store.get_tasks(user_id)
    habits = store.get_habits(user_id)
    metrics = store.get_health_metrics(user_id)
    notes = sorted(store.get_notes(user_id), key=lambda n: n.created_at, reverse=True)

    health = compute_health_score(metrics, habits)
    goal_cards = build_goal_cards(store, user_id, now)
    analytics = [c.analytics for c in goal_cards if c.analytics is not None]

    logger.debug(
        "Dashboard for %s: %d tasks, %d habits, %d goals, health %.1f",
        user_id, len(tasks), len(habits), len(goal_cards), health.score,
    )

    return DashboardEnvelope(
        generated_at=now,
        user=store.get_user(user_id),
        stats=build_stats(tasks, habits, health, analytics),
        health=health,
        tasks=tasks,
        habits=habits,
        goals=goal_cards,
        time_blocks=store.get_time_blocks(user_id),
        health_metrics=metrics,
        notes=notes[:notes_limit] if notes_limit > 0 else [],
    )
