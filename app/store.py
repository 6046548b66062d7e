"""In-memory store — one keyed map per entity, linear scans per user.

Single-process and unsynchronised. Lookups of unknown ids return None/False,
never raise. Goal entries keep their goal's ``current_value`` in step:
creating an entry adds its value, deleting one subtracts it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterator

from pydantic import BaseModel

from app.dashboard.models import (
    Goal,
    GoalCreate,
    GoalEntry,
    GoalEntryCreate,
    GoalType,
    GoalUpdate,
    Habit,
    HabitCreate,
    HabitType,
    HabitUpdate,
    HealthMetric,
    HealthMetricCreate,
    Note,
    NoteCreate,
    NoteUpdate,
    Task,
    TaskCreate,
    TaskPriority,
    TaskUpdate,
    TimeBlock,
    TimeBlockCreate,
    User,
)

logger = logging.getLogger(__name__)


def _changes(updates: BaseModel) -> dict:
    return updates.model_dump(exclude_unset=True, exclude_none=True)


class MemStorage:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.tasks: dict[str, Task] = {}
        self.habits: dict[str, Habit] = {}
        self.health_metrics: dict[str, HealthMetric] = {}
        self.goals: dict[str, Goal] = {}
        self.goal_entries: dict[str, GoalEntry] = {}
        self.notes: dict[str, Note] = {}
        self.time_blocks: dict[str, TimeBlock] = {}

    # -- users --------------------------------------------------------------

    def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    # -- tasks --------------------------------------------------------------

    def get_tasks(self, user_id: str) -> list[Task]:
        return [t for t in self.tasks.values() if t.user_id == user_id]

    def create_task(self, user_id: str, data: TaskCreate) -> Task:
        task = Task(user_id=user_id, **data.model_dump())
        self.tasks[task.id] = task
        logger.debug("Created task %s", task.id)
        return task

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update=_changes(updates))
        self.tasks[task_id] = updated
        return updated

    def delete_task(self, task_id: str) -> bool:
        return self.tasks.pop(task_id, None) is not None

    # -- habits -------------------------------------------------------------

    def get_habits(self, user_id: str) -> list[Habit]:
        return [h for h in self.habits.values() if h.user_id == user_id]

    def create_habit(self, user_id: str, data: HabitCreate) -> Habit:
        habit = Habit(user_id=user_id, **data.model_dump())
        self.habits[habit.id] = habit
        logger.debug("Created habit %s", habit.id)
        return habit

    def update_habit(self, habit_id: str, updates: HabitUpdate) -> Habit | None:
        habit = self.habits.get(habit_id)
        if habit is None:
            return None
        updated = habit.model_copy(update=_changes(updates))
        self.habits[habit_id] = updated
        return updated

    def delete_habit(self, habit_id: str) -> bool:
        return self.habits.pop(habit_id, None) is not None

    # -- health metrics -----------------------------------------------------

    def get_health_metrics(self, user_id: str) -> list[HealthMetric]:
        """Insertion order, so the last metric of a type is the latest added."""
        return [m for m in self.health_metrics.values() if m.user_id == user_id]

    def create_health_metric(
        self,
        user_id: str,
        data: HealthMetricCreate,
        now: datetime | None = None,
    ) -> HealthMetric:
        metric = HealthMetric(user_id=user_id, date=now or datetime.now(timezone.utc), **data.model_dump())
        self.health_metrics[metric.id] = metric
        logger.debug("Logged %s metric %s", metric.type, metric.id)
        return metric

    # -- goals --------------------------------------------------------------

    def get_goals(self, user_id: str) -> list[Goal]:
        return [g for g in self.goals.values() if g.user_id == user_id]

    def get_goal(self, goal_id: str) -> Goal | None:
        return self.goals.get(goal_id)

    def create_goal(self, user_id: str, data: GoalCreate) -> Goal:
        goal = Goal(user_id=user_id, **data.model_dump())
        self.goals[goal.id] = goal
        logger.debug("Created goal %s", goal.id)
        return goal

    def update_goal(self, goal_id: str, updates: GoalUpdate) -> Goal | None:
        goal = self.goals.get(goal_id)
        if goal is None:
            return None
        updated = goal.model_copy(update=_changes(updates))
        self.goals[goal_id] = updated
        return updated

    def delete_goal(self, goal_id: str) -> bool:
        """Delete a goal and cascade to its entries."""
        for entry_id in [e.id for e in self.goal_entries.values() if e.goal_id == goal_id]:
            del self.goal_entries[entry_id]
        return self.goals.pop(goal_id, None) is not None

    # -- goal entries -------------------------------------------------------

    def get_goal_entries(self, goal_id: str) -> list[GoalEntry]:
        """Entries of one goal, newest first."""
        entries = [e for e in self.goal_entries.values() if e.goal_id == goal_id]
        return sorted(entries, key=_entry_sort_key, reverse=True)

    def create_goal_entry(
        self,
        goal_id: str,
        data: GoalEntryCreate,
        now: datetime | None = None,
    ) -> GoalEntry:
        entry = GoalEntry(
            goal_id=goal_id,
            value=data.value,
            note=data.note,
            date=data.date or now or datetime.now(timezone.utc),
        )
        self.goal_entries[entry.id] = entry

        goal = self.goals.get(goal_id)
        if goal is not None:
            self.goals[goal_id] = goal.model_copy(update={"current_value": goal.current_value + data.value})
        return entry

    def delete_goal_entry(self, entry_id: str) -> bool:
        entry = self.goal_entries.pop(entry_id, None)
        if entry is None:
            return False

        goal = self.goals.get(entry.goal_id)
        if goal is not None and entry.value is not None:
            self.goals[goal.id] = goal.model_copy(update={"current_value": goal.current_value - entry.value})
        return True

    # -- notes --------------------------------------------------------------

    def get_notes(self, user_id: str) -> list[Note]:
        return [n for n in self.notes.values() if n.user_id == user_id]

    def create_note(self, user_id: str, data: NoteCreate) -> Note:
        note = Note(user_id=user_id, **data.model_dump())
        self.notes[note.id] = note
        return note

    def update_note(self, note_id: str, updates: NoteUpdate) -> Note | None:
        note = self.notes.get(note_id)
        if note is None:
            return None
        updated = note.model_copy(update=_changes(updates))
        self.notes[note_id] = updated
        return updated

    # -- time blocks --------------------------------------------------------

    def get_time_blocks(self, user_id: str, on: date | None = None) -> list[TimeBlock]:
        blocks = [b for b in self.time_blocks.values() if b.user_id == user_id]
        if on is not None:
            blocks = [b for b in blocks if b.date.date() == on]
        return blocks

    def create_time_block(
        self,
        user_id: str,
        data: TimeBlockCreate,
        now: datetime | None = None,
    ) -> TimeBlock:
        block = TimeBlock(user_id=user_id, date=now or datetime.now(timezone.utc), **data.model_dump())
        self.time_blocks[block.id] = block
        return block


def _entry_sort_key(entry: GoalEntry) -> float:
    if entry.date is None:
        return float("-inf")
    when = entry.date if entry.date.tzinfo else entry.date.replace(tzinfo=timezone.utc)
    return when.timestamp()


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

def seed_demo_data(store: MemStorage, user_id: str, now: datetime) -> None:
    """Load the demo user, tasks, habits, goals with entries and time blocks.

    Dates are relative to `now` so the analytics stay meaningful.
    """

    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    store.create_user(User(id=user_id, username="alexchen", name="Alex Chen", role="Product Designer"))

    for task in (
        Task(id="task-1", user_id=user_id, title="Finish Q1 product roadmap presentation",
             priority=TaskPriority.high, due_time="14:00", created_at=now),
        Task(id="task-2", user_id=user_id, title="Review user feedback from last sprint",
             priority=TaskPriority.medium, due_time="16:00", created_at=now),
        Task(id="task-3", user_id=user_id, title="Morning workout - 30 minutes",
             priority=TaskPriority.low, due_time="07:30", completed=True, created_at=now),
    ):
        store.tasks[task.id] = task

    for habit in (
        Habit(id="habit-1", user_id=user_id, name="Reading", emoji="📚", streak=23, color="orange"),
        Habit(id="habit-2", user_id=user_id, name="Exercise", emoji="💪", streak=7,
              completed_today=True, color="red", current_value=1),
        Habit(id="habit-3", user_id=user_id, name="Meditation", emoji="🧘", streak=12, color="purple"),
        Habit(id="habit-4", user_id=user_id, name="Hydration", emoji="💧", streak=5, color="blue",
              type=HabitType.counter, target_value=8, current_value=5),
    ):
        store.habits[habit.id] = habit

    for goal in (
        Goal(id="goal-1", user_id=user_id, title="Launch Product V2.0",
             description="Complete development and launch of the new product version",
             goal_type=GoalType.percentage, target_value=100, current_value=75, unit="%",
             target_date=now + timedelta(days=40), color="emerald", created_at=ago(120)),
        Goal(id="goal-2", user_id=user_id, title="Read 24 Books",
             description="Complete 24 books this year to expand knowledge",
             goal_type=GoalType.number, target_value=24, current_value=6, unit="books",
             target_date=now + timedelta(days=300), color="purple", created_at=ago(65)),
        Goal(id="goal-3", user_id=user_id, title="Save ₹1 Lakh",
             description="Build emergency fund for financial security",
             goal_type=GoalType.number, target_value=100000, current_value=45000, unit="₹",
             target_date=now + timedelta(days=300), color="orange", created_at=ago(65)),
        Goal(id="goal-4", user_id=user_id, title="Write 500 Pages",
             description="Complete first draft of novel",
             goal_type=GoalType.number, target_value=500, current_value=127, unit="pages",
             target_date=now + timedelta(days=180), color="blue", created_at=ago(30)),
    ):
        store.goals[goal.id] = goal

    # Entry sums match each goal's current_value
    for entry_id, goal_id, value, note, days in (
        ("entry-1", "goal-2", 1, "Finished 'Atomic Habits'", 26),
        ("entry-2", "goal-2", 1, "Completed 'The Lean Startup'", 16),
        ("entry-3", "goal-2", 2, "Read two novels this week", 4),
        ("entry-4", "goal-2", 1, "Finished design thinking book", 2),
        ("entry-5", "goal-2", 1, "Psychology of design", 1),
        ("entry-6", "goal-3", 15000, "January salary savings", 5),
        ("entry-7", "goal-3", 12000, "Freelance project payment", 0),
        ("entry-8", "goal-3", 8000, "Side hustle income", 2),
        ("entry-9", "goal-3", 10000, "February savings", 1),
        ("entry-10", "goal-4", 15, "Morning writing session", 4),
        ("entry-11", "goal-4", 22, "Character development chapter", 3),
        ("entry-12", "goal-4", 18, "Dialog heavy scene", 2),
        ("entry-13", "goal-4", 25, "Plot twist chapter", 1),
        ("entry-14", "goal-4", 12, "Edit and revisions", 0),
        ("entry-15", "goal-4", 35, "Productive weekend writing", 0),
    ):
        store.goal_entries[entry_id] = GoalEntry(id=entry_id, goal_id=goal_id, value=value, note=note, date=ago(days))

    for block in (
        TimeBlock(id="block-1", user_id=user_id, title="Team Standup", start_time="09:00",
                  duration=30, color="indigo", date=now),
        TimeBlock(id="block-2", user_id=user_id, title="Deep Work - Product Strategy", start_time="10:00",
                  duration=120, color="emerald", date=now),
        TimeBlock(id="block-3", user_id=user_id, title="Client Presentation", start_time="14:00",
                  duration=60, color="orange", date=now),
    ):
        store.time_blocks[block.id] = block

    logger.info(
        "Seeded demo data for %s: %d tasks, %d habits, %d goals, %d entries",
        user_id, len(store.tasks), len(store.habits), len(store.goals), len(store.goal_entries),
    )


store = MemStorage()


def get_store() -> Iterator[MemStorage]:
    yield store
