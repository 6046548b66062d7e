"""Endpoint tests — FastAPI app via httpx."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from app.store import seed_demo_data
from tests.conftest import NOW


class TestDashboardEndpoints:
    @pytest.mark.asyncio
    async def test_empty_dashboard(self, client):
        resp = await client.get("/api/dashboard")
        assert resp.status_code == 200
        body = resp.json()
        assert body["health"] == {"score": 75.0, "breakdown": []}
        assert body["stats"]["focus"] == "0/0"
        assert body["stats"]["longest_streak"] == 0
        assert body["goals"] == []

    @pytest.mark.asyncio
    async def test_seeded_dashboard(self, client, override_store):
        seed_demo_data(override_store, "demo-user", NOW)
        resp = await client.get("/api/dashboard")
        assert resp.status_code == 200
        body = resp.json()
        assert body["user"]["name"] == "Alex Chen"
        assert len(body["goals"]) == 4
        assert body["goals"][0]["analytics"]["color_code"] in {"red", "amber", "green"}
        assert len(body["notes"]) == 0

    @pytest.mark.asyncio
    async def test_health_score(self, client):
        await client.post("/api/health-metrics", json={"type": "sleep", "value": 8, "unit": "hours"})
        resp = await client.get("/api/health-score")
        assert resp.status_code == 200
        body = resp.json()
        assert body["score"] == 90.9
        assert [c["category"] for c in body["breakdown"]] == ["Sleep", "Habits"]

    @pytest.mark.asyncio
    async def test_goal_analytics(self, client, override_store):
        seed_demo_data(override_store, "demo-user", NOW)
        resp = await client.get("/api/goals/goal-2/analytics")
        assert resp.status_code == 200
        body = resp.json()
        assert body["progress_percentage"] == 25.0
        assert body["milestones"][0]["reached"] is True
        assert body["milestones"][0]["celebration"] == "Great start!"

    @pytest.mark.asyncio
    async def test_goal_analytics_unknown_goal(self, client):
        resp = await client.get("/api/goals/nope/analytics")
        assert resp.status_code == 404


class TestGoalEndpoints:
    @pytest.mark.asyncio
    async def test_goal_entry_round_trip(self, client):
        resp = await client.post(
            "/api/goals",
            json={"title": "Read 24 books", "goal_type": "number", "target_value": 24, "unit": "books"},
        )
        assert resp.status_code == 201
        goal_id = resp.json()["id"]

        resp = await client.post(f"/api/goals/{goal_id}/entries", json={"value": 3, "note": "Good week"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["goal"]["current_value"] == 3.0
        entry_id = body["entry"]["id"]

        resp = await client.get(f"/api/goals/{goal_id}/entries")
        assert [e["id"] for e in resp.json()] == [entry_id]

        resp = await client.delete(f"/api/goal-entries/{entry_id}")
        assert resp.status_code == 204

        goals = (await client.get("/api/goals")).json()
        assert goals[0]["current_value"] == 0.0

    @pytest.mark.asyncio
    async def test_entry_for_unknown_goal(self, client):
        resp = await client.post("/api/goals/nope/entries", json={"value": 1})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_entry_requires_value(self, client):
        goal_id = (await client.post("/api/goals", json={"title": "Launch"})).json()["id"]
        resp = await client.post(f"/api/goals/{goal_id}/entries", json={"note": "no value"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_update_and_delete_goal(self, client):
        goal_id = (await client.post("/api/goals", json={"title": "Launch"})).json()["id"]

        resp = await client.patch(f"/api/goals/{goal_id}", json={"current_value": 40})
        assert resp.status_code == 200
        assert resp.json()["current_value"] == 40.0
        assert resp.json()["title"] == "Launch"

        assert (await client.delete(f"/api/goals/{goal_id}")).status_code == 204
        assert (await client.delete(f"/api/goals/{goal_id}")).status_code == 404
        assert (await client.patch(f"/api/goals/{goal_id}", json={"title": "x"})).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_entry(self, client):
        resp = await client.delete("/api/goal-entries/nope")
        assert resp.status_code == 404


class TestRecordEndpoints:
    @pytest.mark.asyncio
    async def test_task_crud(self, client):
        resp = await client.post("/api/tasks", json={"title": "Review feedback", "priority": "high"})
        assert resp.status_code == 201
        task_id = resp.json()["id"]

        resp = await client.patch(f"/api/tasks/{task_id}", json={"completed": True})
        assert resp.json()["completed"] is True

        assert (await client.delete(f"/api/tasks/{task_id}")).status_code == 204
        assert (await client.get("/api/tasks")).json() == []

    @pytest.mark.asyncio
    async def test_task_invalid_priority(self, client):
        resp = await client.post("/api/tasks", json={"title": "x", "priority": "urgent"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_task_404(self, client):
        assert (await client.patch("/api/tasks/nope", json={"completed": True})).status_code == 404
        assert (await client.delete("/api/tasks/nope")).status_code == 404

    @pytest.mark.asyncio
    async def test_habit_crud(self, client):
        resp = await client.post(
            "/api/habits",
            json={"name": "Hydration", "emoji": "💧", "type": "counter", "target_value": 8},
        )
        assert resp.status_code == 201
        habit_id = resp.json()["id"]

        resp = await client.patch(f"/api/habits/{habit_id}", json={"current_value": 8})
        assert resp.json()["current_value"] == 8

        assert (await client.delete(f"/api/habits/{habit_id}")).status_code == 204
        assert (await client.patch(f"/api/habits/{habit_id}", json={"current_value": 1})).status_code == 404

    @pytest.mark.asyncio
    async def test_health_metrics(self, client):
        resp = await client.post("/api/health-metrics", json={"type": "steps", "value": 8500, "unit": "steps"})
        assert resp.status_code == 201
        metrics = (await client.get("/api/health-metrics")).json()
        assert len(metrics) == 1
        assert metrics[0]["type"] == "steps"

    @pytest.mark.asyncio
    async def test_notes(self, client):
        resp = await client.post("/api/notes", json={"content": "Call Sam", "tags": ["todo"]})
        assert resp.status_code == 201
        note_id = resp.json()["id"]

        resp = await client.patch(f"/api/notes/{note_id}", json={"content": "Called Sam"})
        assert resp.json()["content"] == "Called Sam"
        assert resp.json()["tags"] == ["todo"]
        assert (await client.patch("/api/notes/nope", json={"content": "x"})).status_code == 404

    @pytest.mark.asyncio
    async def test_time_blocks(self, client):
        resp = await client.post("/api/time-blocks", json={"title": "Standup", "start_time": "09:00", "duration": 30})
        assert resp.status_code == 201

        assert len((await client.get("/api/time-blocks?date=2026-02-18")).json()) == 1
        assert (await client.get("/api/time-blocks?date=2026-02-19")).json() == []
        assert len((await client.get("/api/time-blocks")).json()) == 1

    @pytest.mark.asyncio
    async def test_time_block_validation(self, client):
        resp = await client.post("/api/time-blocks", json={"title": "x", "start_time": "25:00", "duration": 30})
        assert resp.status_code == 422
        resp = await client.post("/api/time-blocks", json={"title": "x", "start_time": "09:00", "duration": 0})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_time_blocks_invalid_date(self, client):
        resp = await client.get("/api/time-blocks?date=not-a-date")
        assert resp.status_code == 422


class TestApiKey:
    @pytest.mark.asyncio
    async def test_missing_key_rejected(self, client):
        with patch("app.auth.settings.dashboard_api_key", "secret"):
            resp = await client.get("/api/dashboard")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_header_key_accepted(self, client):
        with patch("app.auth.settings.dashboard_api_key", "secret"):
            resp = await client.get("/api/dashboard", headers={"X-API-Key": "secret"})
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_bearer_key_accepted(self, client):
        with patch("app.auth.settings.dashboard_api_key", "secret"):
            resp = await client.get("/api/health-score", headers={"Authorization": "Bearer secret"})
        assert resp.status_code == 200


class TestServiceEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_root_lists_routes(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json()["api"]["dashboard"] == "/api/dashboard"
