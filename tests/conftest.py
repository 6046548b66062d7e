"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.clock import get_now
from app.dashboard.models import Goal, GoalEntry, GoalType, Habit, HabitType, HealthMetric
from app.main import app
from app.store import MemStorage, get_store

# Wednesday. Sat/Sun around it: Feb 14/15 and Feb 7/8.
NOW = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fresh in-memory store + frozen clock per test
# ---------------------------------------------------------------------------

@pytest.fixture()
def store() -> MemStorage:
    """Return an empty MemStorage (seed it in tests if needed)."""
    return MemStorage()


@pytest.fixture()
def override_store(store):
    """Override the FastAPI dependencies so every test gets its own store and clock."""
    def _store():
        yield store

    app.dependency_overrides[get_store] = _store
    app.dependency_overrides[get_now] = lambda: NOW
    yield store
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_store):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Entity helpers
# ---------------------------------------------------------------------------

def days_ago(days: float, now: datetime = NOW) -> datetime:
    return now - timedelta(days=days)


def make_goal(**overrides: Any) -> Goal:
    """Number goal of 100 pages, created 30 days before NOW, due 30 days after."""
    defaults: dict[str, Any] = dict(
        id="goal-test",
        user_id="demo-user",
        title="Write 100 pages",
        goal_type=GoalType.number,
        target_value=100.0,
        current_value=0.0,
        unit="pages",
        created_at=days_ago(30),
        target_date=NOW + timedelta(days=30),
    )
    defaults.update(overrides)
    return Goal(**defaults)


def make_entry(value: float | None, when: datetime | None, goal_id: str = "goal-test") -> GoalEntry:
    return GoalEntry(goal_id=goal_id, value=value, date=when)


def make_metric(metric_type: str, value: float, unit: str = "") -> HealthMetric:
    return HealthMetric(user_id="demo-user", type=metric_type, value=value, unit=unit, date=NOW)


def make_habit(name: str = "Reading", **overrides: Any) -> Habit:
    defaults: dict[str, Any] = dict(user_id="demo-user", name=name, type=HabitType.boolean)
    defaults.update(overrides)
    return Habit(**defaults)
