"""Tests for the in-memory store."""

from __future__ import annotations

from datetime import date, timedelta

from app.dashboard.models import (
    GoalCreate,
    GoalEntryCreate,
    GoalType,
    HabitCreate,
    HabitUpdate,
    HealthMetricCreate,
    NoteCreate,
    NoteUpdate,
    TaskCreate,
    TaskUpdate,
    TimeBlockCreate,
)
from app.store import MemStorage, seed_demo_data
from tests.conftest import NOW, days_ago

USER = "demo-user"


def _goal(store: MemStorage, current: float = 0.0):
    return store.create_goal(
        USER,
        GoalCreate(title="Read 24 books", goal_type=GoalType.number, target_value=24, current_value=current),
    )


class TestGoalEntries:
    def test_create_entry_adds_to_goal(self, store):
        goal = _goal(store, current=2)
        store.create_goal_entry(goal.id, GoalEntryCreate(value=3), now=NOW)
        assert store.get_goal(goal.id).current_value == 5.0

    def test_delete_entry_restores_goal(self, store):
        goal = _goal(store, current=2)
        entry = store.create_goal_entry(goal.id, GoalEntryCreate(value=3), now=NOW)
        assert store.delete_goal_entry(entry.id) is True
        assert store.get_goal(goal.id).current_value == 2.0

    def test_delete_entry_restores_negative_total(self, store):
        goal = _goal(store, current=-2)
        entry = store.create_goal_entry(goal.id, GoalEntryCreate(value=1), now=NOW)
        assert store.get_goal(goal.id).current_value == -1.0
        store.delete_goal_entry(entry.id)
        assert store.get_goal(goal.id).current_value == -2.0

    def test_delete_negative_entry_restores_goal(self, store):
        goal = _goal(store, current=5)
        entry = store.create_goal_entry(goal.id, GoalEntryCreate(value=-3), now=NOW)
        assert store.get_goal(goal.id).current_value == 2.0
        store.delete_goal_entry(entry.id)
        assert store.get_goal(goal.id).current_value == 5.0

    def test_delete_unknown_entry(self, store):
        assert store.delete_goal_entry("nope") is False

    def test_entry_defaults_to_now(self, store):
        goal = _goal(store)
        entry = store.create_goal_entry(goal.id, GoalEntryCreate(value=1, note="chapter"), now=NOW)
        assert entry.date == NOW
        assert entry.note == "chapter"

    def test_entry_backfill_date(self, store):
        goal = _goal(store)
        entry = store.create_goal_entry(goal.id, GoalEntryCreate(value=1, date=days_ago(3)), now=NOW)
        assert entry.date == days_ago(3)

    def test_entries_newest_first(self, store):
        goal = _goal(store)
        for days in (5, 1, 3):
            store.create_goal_entry(goal.id, GoalEntryCreate(value=1, date=days_ago(days)), now=NOW)
        dates = [e.date for e in store.get_goal_entries(goal.id)]
        assert dates == [days_ago(1), days_ago(3), days_ago(5)]

    def test_delete_goal_cascades(self, store):
        goal = _goal(store)
        other = _goal(store)
        store.create_goal_entry(goal.id, GoalEntryCreate(value=1), now=NOW)
        store.create_goal_entry(other.id, GoalEntryCreate(value=1), now=NOW)

        assert store.delete_goal(goal.id) is True
        assert store.get_goal(goal.id) is None
        assert store.get_goal_entries(goal.id) == []
        assert len(store.get_goal_entries(other.id)) == 1

    def test_delete_unknown_goal(self, store):
        assert store.delete_goal("nope") is False


class TestRecords:
    def test_task_lifecycle(self, store):
        task = store.create_task(USER, TaskCreate(title="Ship it", due_time="09:30"))
        assert task.priority.value == "medium"
        assert task.completed is False

        updated = store.update_task(task.id, TaskUpdate(completed=True))
        assert updated.completed is True
        assert updated.title == "Ship it"

        assert store.delete_task(task.id) is True
        assert store.get_tasks(USER) == []

    def test_update_unknown_task(self, store):
        assert store.update_task("nope", TaskUpdate(completed=True)) is None

    def test_habit_update_partial(self, store):
        habit = store.create_habit(USER, HabitCreate(name="Reading", emoji="📚"))
        updated = store.update_habit(habit.id, HabitUpdate(completed_today=True))
        assert updated.completed_today is True
        assert updated.emoji == "📚"

    def test_metrics_keep_insertion_order(self, store):
        store.create_health_metric(USER, HealthMetricCreate(type="sleep", value=6, unit="hours"), now=NOW)
        store.create_health_metric(USER, HealthMetricCreate(type="sleep", value=8, unit="hours"), now=NOW)
        assert [m.value for m in store.get_health_metrics(USER)] == [6.0, 8.0]

    def test_note_update(self, store):
        note = store.create_note(USER, NoteCreate(content="Idea", tags=["work"]))
        updated = store.update_note(note.id, NoteUpdate(content="Better idea"))
        assert updated.content == "Better idea"
        assert updated.tags == ["work"]
        assert store.update_note("nope", NoteUpdate(content="x")) is None

    def test_time_blocks_date_filter(self, store):
        store.create_time_block(USER, TimeBlockCreate(title="Standup", start_time="09:00", duration=15), now=NOW)
        store.create_time_block(
            USER,
            TimeBlockCreate(title="Review", start_time="15:00", duration=60),
            now=NOW - timedelta(days=1),
        )
        assert len(store.get_time_blocks(USER)) == 2
        assert [b.title for b in store.get_time_blocks(USER, date(2026, 2, 18))] == ["Standup"]
        assert store.get_time_blocks(USER, date(2026, 1, 1)) == []

    def test_records_scoped_to_user(self, store):
        store.create_task("someone-else", TaskCreate(title="Not mine"))
        assert store.get_tasks(USER) == []


class TestSeedDemoData:
    def test_seed_counts(self, store):
        seed_demo_data(store, USER, NOW)
        assert store.get_user(USER).name == "Alex Chen"
        assert store.get_user_by_username("alexchen").id == USER
        assert len(store.get_tasks(USER)) == 3
        assert len(store.get_habits(USER)) == 4
        assert len(store.get_goals(USER)) == 4
        assert len(store.get_time_blocks(USER)) == 3

    def test_seed_entries_match_current_values(self, store):
        seed_demo_data(store, USER, NOW)
        for goal in store.get_goals(USER):
            entries = store.get_goal_entries(goal.id)
            if entries:
                assert sum(e.value for e in entries) == goal.current_value
