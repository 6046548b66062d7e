"""Dashboard HTTP router — aggregation, health score, goal analytics."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from app.auth import verify_api_key
from app.clock import get_now
from app.config import settings
from app.dashboard import builders
from app.dashboard.goal_analytics import compute_goal_analytics
from app.dashboard.models import DashboardEnvelope, GoalAnalytics, HealthScore
from app.store import MemStorage, get_store

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardEnvelope)
async def get_dashboard(
    store: MemStorage = Depends(get_store),
    now: datetime = Depends(get_now),
    _: str = Depends(verify_api_key),
) -> DashboardEnvelope:
    return builders.build_dashboard(
        store,
        settings.demo_user_id,
        now,
        notes_limit=settings.dashboard_notes_limit,
    )


@router.get("/health-score", response_model=HealthScore)
async def get_health_score(
    store: MemStorage = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> HealthScore:
    return builders.build_health_score(store, settings.demo_user_id)


@router.get("/goals/{goal_id}/analytics", response_model=GoalAnalytics)
async def get_goal_analytics(
    goal_id: str,
    store: MemStorage = Depends(get_store),
    now: datetime = Depends(get_now),
    _: str = Depends(verify_api_key),
) -> GoalAnalytics:
    goal = store.get_goal(goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Goal not found: {goal_id}")
    return compute_goal_analytics(goal, store.get_goal_entries(goal_id), now)
