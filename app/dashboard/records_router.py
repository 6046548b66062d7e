"""Tasks, habits, health metrics, notes and time blocks endpoints."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.auth import verify_api_key
from app.clock import get_now
from app.config import settings
from app.dashboard.models import (
    Habit,
    HabitCreate,
    HabitUpdate,
    HealthMetric,
    HealthMetricCreate,
    Note,
    NoteCreate,
    NoteUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
    TimeBlock,
    TimeBlockCreate,
)
from app.store import MemStorage, get_store

router = APIRouter(prefix="/api", tags=["records"])


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


# ---------------------------------------------------------------------------
# /api/tasks
# ---------------------------------------------------------------------------


@router.get("/tasks", response_model=list[Task])
async def list_tasks(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[Task]:
    return store.get_tasks(settings.demo_user_id)


@router.post("/tasks", response_model=Task, status_code=201)
async def create_task(
    payload: TaskCreate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Task:
    return store.create_task(settings.demo_user_id, payload)


@router.patch("/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Task:
    task = store.update_task(task_id, payload)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Response:
    if not store.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# /api/habits
# ---------------------------------------------------------------------------


@router.get("/habits", response_model=list[Habit])
async def list_habits(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[Habit]:
    return store.get_habits(settings.demo_user_id)


@router.post("/habits", response_model=Habit, status_code=201)
async def create_habit(
    payload: HabitCreate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Habit:
    return store.create_habit(settings.demo_user_id, payload)


@router.patch("/habits/{habit_id}", response_model=Habit)
async def update_habit(
    habit_id: str,
    payload: HabitUpdate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Habit:
    habit = store.update_habit(habit_id, payload)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit


@router.delete("/habits/{habit_id}", status_code=204)
async def delete_habit(
    habit_id: str,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Response:
    if not store.delete_habit(habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# /api/health-metrics
# ---------------------------------------------------------------------------


@router.get("/health-metrics", response_model=list[HealthMetric])
async def list_health_metrics(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[HealthMetric]:
    return store.get_health_metrics(settings.demo_user_id)


@router.post("/health-metrics", response_model=HealthMetric, status_code=201)
async def create_health_metric(
    payload: HealthMetricCreate,
    store: MemStorage = Depends(get_store),
    now: datetime = Depends(get_now),
    _: str = Depends(verify_api_key),
) -> HealthMetric:
    return store.create_health_metric(settings.demo_user_id, payload, now=now)


# ---------------------------------------------------------------------------
# /api/notes
# ---------------------------------------------------------------------------


@router.get("/notes", response_model=list[Note])
async def list_notes(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[Note]:
    return store.get_notes(settings.demo_user_id)


@router.post("/notes", response_model=Note, status_code=201)
async def create_note(
    payload: NoteCreate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Note:
    return store.create_note(settings.demo_user_id, payload)


@router.patch("/notes/{note_id}", response_model=Note)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Note:
    note = store.update_note(note_id, payload)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


# ---------------------------------------------------------------------------
# /api/time-blocks
# ---------------------------------------------------------------------------


@router.get("/time-blocks", response_model=list[TimeBlock])
async def list_time_blocks(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
    on_date: str | None = Query(default=None, alias="date", description="Only blocks on this day (YYYY-MM-DD)"),
) -> list[TimeBlock]:
    on = _parse_date(on_date, "date") if on_date else None
    return store.get_time_blocks(settings.demo_user_id, on)


@router.post("/time-blocks", response_model=TimeBlock, status_code=201)
async def create_time_block(
    payload: TimeBlockCreate,
    store: MemStorage = Depends(get_store),
    now: datetime = Depends(get_now),
    _: str = Depends(verify_api_key),
) -> TimeBlock:
    return store.create_time_block(settings.demo_user_id, payload, now=now)
