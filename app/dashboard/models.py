"""Dashboard entities and report contracts — Pydantic v2 models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GoalType(str, Enum):
    percentage = "percentage"
    number = "number"


class HabitType(str, Enum):
    boolean = "boolean"
    counter = "counter"


class TaskPriority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class ColorCode(str, Enum):
    red = "red"
    amber = "amber"
    green = "green"


_CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class User(BaseModel):
    id: str = Field(default_factory=_new_id)
    username: str
    name: str
    role: str = "User"
    avatar: str | None = None


class Task(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    title: str
    priority: TaskPriority = TaskPriority.medium
    due_time: str | None = None  # "HH:MM"
    completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


class Habit(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str = ""
    name: str
    emoji: str = ""
    streak: int = 0  # Maintained by the client, read-only here
    completed_today: bool = False
    color: str = "slate"
    type: HabitType = HabitType.boolean
    target_value: int = 1
    current_value: int = 0


class HealthMetric(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str = ""
    type: str  # "sleep" | "steps" | "water" | "weight" | "calories" | "heart_rate" | ...
    value: float
    unit: str = ""
    date: datetime = Field(default_factory=_utcnow)


class Goal(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str = ""
    title: str
    description: str | None = None
    goal_type: GoalType = GoalType.percentage
    target_value: float = 100.0  # Ignored for percentage goals (ceiling is 100)
    current_value: float = 0.0  # Running sum of entry values
    unit: str = ""
    target_date: datetime | None = None
    color: str = "slate"
    created_at: datetime = Field(default_factory=_utcnow)
    is_archived: bool = False


class GoalEntry(BaseModel):
    """One progress contribution.

    ``value`` and ``date`` are optional so partial snapshots can be handed
    to the analytics engine, which skips entries missing either.
    """

    id: str = Field(default_factory=_new_id)
    goal_id: str
    value: float | None = None
    note: str | None = None
    date: datetime | None = Field(default_factory=_utcnow)


class Note(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    content: str
    tags: list[str] | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class TimeBlock(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    title: str
    start_time: str  # "HH:MM"
    duration: int  # minutes
    color: str = "slate"
    date: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    priority: TaskPriority = TaskPriority.medium
    due_time: str | None = Field(default=None, pattern=_CLOCK_PATTERN)
    completed: bool = False


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    priority: TaskPriority | None = None
    due_time: str | None = Field(default=None, pattern=_CLOCK_PATTERN)
    completed: bool | None = None


class HabitCreate(BaseModel):
    name: str = Field(min_length=1)
    emoji: str = ""
    streak: int = Field(default=0, ge=0)
    completed_today: bool = False
    color: str = "slate"
    type: HabitType = HabitType.boolean
    target_value: int = Field(default=1, ge=1)
    current_value: int = Field(default=0, ge=0)


class HabitUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    emoji: str | None = None
    streak: int | None = Field(default=None, ge=0)
    completed_today: bool | None = None
    color: str | None = None
    type: HabitType | None = None
    target_value: int | None = Field(default=None, ge=1)
    current_value: int | None = Field(default=None, ge=0)


class HealthMetricCreate(BaseModel):
    type: str = Field(min_length=1)
    value: float
    unit: str = ""


class GoalCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    goal_type: GoalType = GoalType.percentage
    target_value: float = 100.0
    current_value: float = 0.0
    unit: str = ""
    target_date: datetime | None = None
    color: str = "slate"
    is_archived: bool = False


class GoalUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    goal_type: GoalType | None = None
    target_value: float | None = None
    current_value: float | None = None
    unit: str | None = None
    target_date: datetime | None = None
    color: str | None = None
    is_archived: bool | None = None


class GoalEntryCreate(BaseModel):
    value: float
    note: str | None = None
    date: datetime | None = None  # Backfill; defaults to now


class NoteCreate(BaseModel):
    content: str = Field(min_length=1)
    tags: list[str] | None = None


class NoteUpdate(BaseModel):
    content: str | None = Field(default=None, min_length=1)
    tags: list[str] | None = None


class TimeBlockCreate(BaseModel):
    title: str = Field(min_length=1)
    start_time: str = Field(pattern=_CLOCK_PATTERN)
    duration: int = Field(gt=0)
    color: str = "slate"


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class Milestone(BaseModel):
    percentage: int
    reached: bool = False
    date: datetime | None = None  # When the cumulative entry sum first crossed it
    celebration: str | None = None


class GoalAnalytics(BaseModel):
    progress: float
    progress_percentage: float
    is_on_track: bool
    days_remaining: int
    daily_target_remaining: float
    projected_completion_date: datetime
    velocity: float  # Average daily progress over the last 7 days
    streak: int
    milestones: list[Milestone] = Field(default_factory=list)
    color_code: ColorCode
    insights: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class HealthCategoryScore(BaseModel):
    category: str
    score: float  # 0–100
    details: str = ""


class HealthScore(BaseModel):
    score: float  # 0–100, one decimal
    breakdown: list[HealthCategoryScore] = Field(default_factory=list)


class GoalEntryCreated(BaseModel):
    entry: GoalEntry
    goal: Goal


class GoalCard(BaseModel):
    goal: Goal
    display: str  # "75%" | "6/24 books"
    analytics: GoalAnalytics | None = None  # None for archived goals


class DashboardStats(BaseModel):
    focus: str  # "completed/total"
    focus_percentage: int
    longest_streak: int
    health_score: float
    health_label: str
    insights: int


class DashboardEnvelope(BaseModel):
    """Top-level /api/dashboard response — always constructible."""

    generated_at: datetime = Field(default_factory=_utcnow)
    user: User | None = None
    stats: DashboardStats
    health: HealthScore
    tasks: list[Task] = Field(default_factory=list)
    habits: list[Habit] = Field(default_factory=list)
    goals: list[GoalCard] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    time_blocks: list[TimeBlock] = Field(default_factory=list)
    health_metrics: list[HealthMetric] = Field(default_factory=list)
