"""Goals & goal entries endpoints."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response

from app.auth import verify_api_key
from app.clock import get_now
from app.config import settings
from app.dashboard.models import (
    Goal,
    GoalCreate,
    GoalEntry,
    GoalEntryCreate,
    GoalEntryCreated,
    GoalUpdate,
)
from app.store import MemStorage, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/goals", response_model=list[Goal])
async def list_goals(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[Goal]:
    return store.get_goals(settings.demo_user_id)


@router.post("/goals", response_model=Goal, status_code=201)
async def create_goal(
    payload: GoalCreate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Goal:
    return store.create_goal(settings.demo_user_id, payload)


@router.patch("/goals/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Goal:
    goal = store.update_goal(goal_id, payload)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.delete("/goals/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: str,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Response:
    if not store.delete_goal(goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return Response(status_code=204)


@router.get("/goals/{goal_id}/entries", response_model=list[GoalEntry])
async def list_goal_entries(
    goal_id: str,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[GoalEntry]:
    """Newest first. Unknown goals simply have no entries."""
    return store.get_goal_entries(goal_id)


@router.post("/goals/{goal_id}/entries", response_model=GoalEntryCreated, status_code=201)
async def create_goal_entry(
    goal_id: str,
    payload: GoalEntryCreate,
    store: MemStorage = Depends(get_store),
    now: datetime = Depends(get_now),
    _: str = Depends(verify_api_key),
) -> GoalEntryCreated:
    """Log progress; returns the entry with the goal's updated running total."""
    if store.get_goal(goal_id) is None:
        logger.warning("Entry for unknown goal %s rejected", goal_id)
        raise HTTPException(status_code=404, detail="Goal not found")

    entry = store.create_goal_entry(goal_id, payload, now=now)
    return GoalEntryCreated(entry=entry, goal=store.get_goal(goal_id))


@router.delete("/goal-entries/{entry_id}", status_code=204)
async def delete_goal_entry(
    entry_id: str,
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> Response:
    if not store.delete_goal_entry(entry_id):
        raise HTTPException(status_code=404, detail="Goal entry not found")
    return Response(status_code=204)
