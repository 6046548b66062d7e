import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.clock import get_now
from app.config import settings
from app.dashboard.goals_router import router as goals_router
from app.dashboard.records_router import router as records_router
from app.dashboard.router import router as dashboard_router
from app.store import seed_demo_data, store

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_demo_data and store.get_user(settings.demo_user_id) is None:
        seed_demo_data(store, settings.demo_user_id, get_now())
    logger.info("Dashboard ready (tz=%s, user=%s)", settings.default_tz, settings.demo_user_id)
    yield


app = FastAPI(title="Pulseboard", version="0.1.0", lifespan=lifespan)
app.include_router(dashboard_router)
app.include_router(goals_router)
app.include_router(records_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": {
            "dashboard": "/api/dashboard",
            "health_score": "/api/health-score",
            "goal_analytics": "/api/goals/{id}/analytics",
            "goals": "/api/goals",
            "goal_entries": "/api/goals/{id}/entries",
            "tasks": "/api/tasks",
            "habits": "/api/habits",
            "health_metrics": "/api/health-metrics",
            "notes": "/api/notes",
            "time_blocks": "/api/time-blocks",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
